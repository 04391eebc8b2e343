class DatatypeError(Exception):
    """Base class for record normalization failures"""


class UnsupportedVersion(DatatypeError, ValueError):
    """Raised when a record is requested in a schema version that is not known"""

    def __init__(self, version, datatype: str):
        self.version = version
        self.datatype = datatype
        super().__init__(f'unsupported version "{version}" for {datatype} datatype')


class MissingRequiredField(DatatypeError, KeyError):
    """Raised when a record lacks a field its datatype cannot do without"""

    def __init__(self, field: str, datatype: str):
        self.field = field
        self.datatype = datatype
        super().__init__(field)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the field name
        return f'required field "{self.field}" is missing from {self.datatype} data'
