from typing import Any, Optional


class ElasticOrmException(Exception):
    """Base exception for elasticorm errors."""


# Mapping exceptions
class MappingException(ElasticOrmException):
    """Base exception for schema derivation and field resolution errors."""


class InvalidOptionError(MappingException):
    """Exception raised when an elasticorm tag option is unknown, has an invalid value or conflicts."""

    def __init__(self, key: str, value: str, reason: Optional[str] = None):
        self.key = key
        self.value = value
        self.reason = reason
        message = f"parsing option {key}={value} failed: invalid elasticorm option"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class UnresolvedFieldMappingError(MappingException):
    """Exception raised when a logical field path has no mapping in the schema."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"mapping configuration has no mapping for struct field {path}")


class MalformedRecordTypeError(MappingException):
    """Exception raised when an object/nested field does not reduce to a record type."""

    def __init__(self, record_type: Any, reason: str = "type is not a record"):
        self.record_type = record_type
        super().__init__(f"malformed record type {record_type!r}: {reason}")


class RecursiveRecordTypeError(MalformedRecordTypeError):
    """Exception raised when a record type contains itself, directly or transitively."""

    def __init__(self, record_type: Any):
        super().__init__(record_type, "record type references itself")


# Datastore exceptions
class DatastoreException(ElasticOrmException):
    """Base exception for datastore-related errors."""


class RecordNotFound(DatastoreException):
    """Exception raised when a record is not found in the index."""


class RecordNotSaved(DatastoreException):
    """Exception raised when a record could not be saved."""


class InvalidRecordType(DatastoreException):
    """Exception raised when a record of another type is passed to a datastore."""


class InvalidIDField(DatastoreException):
    """Exception raised when the ID field of a record is missing or not a string."""


class IndexCreationError(DatastoreException):
    """Exception raised when the index could not be created."""
