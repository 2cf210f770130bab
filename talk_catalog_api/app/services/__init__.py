"""
Service layer abstraction.

Each service encapsulates the store access for one collection so API
handlers never issue SQL themselves.
"""
