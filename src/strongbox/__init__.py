import enum
import os.path

from ._output import output

with open(os.path.dirname(__file__) + "/version.txt") as f:
    __version__ = f.read().strip()


class ErrorKind(enum.Enum):
    """The closed set of failures the store reports to its callers."""

    ARGUMENT = "argument"
    NOT_FOUND = "not-found"
    AUTHENTICATION = "authentication"
    IO = "io"
    CORRUPT_DATA = "corrupt-data"


class ReportingException(Exception):
    """Exceptions that support user-readable reporting."""

    kind: ErrorKind

    def __str__(self):
        raise NotImplementedError()

    def report(self):
        raise NotImplementedError()


class ArgumentError(ReportingException):
    """A required input was missing or empty."""

    kind = ErrorKind.ARGUMENT
    argument: str
    message: str

    @classmethod
    def from_context(cls, argument, message=None):
        self = cls()
        self.argument = argument
        self.message = message or "must specify {}".format(argument)
        return self

    def __str__(self):
        return self.message

    def report(self):
        output.error(self.message)


class NotFoundError(ReportingException):
    """A secret or service name does not resolve."""

    kind = ErrorKind.NOT_FOUND
    what: str
    name: str

    @classmethod
    def from_context(cls, what, name):
        self = cls()
        self.what = what
        self.name = name
        return self

    def __str__(self):
        return "could not find {} named: {}".format(self.what, self.name)

    def report(self):
        output.error("Unknown {}".format(self.what))
        output.tabular("name", self.name, red=True)


class AuthenticationError(ReportingException):
    """A ciphertext did not verify under the given passphrase."""

    kind = ErrorKind.AUTHENTICATION
    message: str
    field: str

    @classmethod
    def from_context(cls, message, field=None):
        self = cls()
        self.message = message
        self.field = field
        return self

    def __str__(self):
        if self.field:
            return "{} ({})".format(self.message, self.field)
        return self.message

    def report(self):
        output.error(self.message)
        if self.field:
            output.tabular("field", self.field, red=True)


class StoreIOError(ReportingException):
    """The store file could not be read or written."""

    kind = ErrorKind.IO
    path: str
    error: str

    @classmethod
    def from_context(cls, path, error):
        self = cls()
        self.path = str(path)
        self.error = error.strerror or str(error)
        return self

    def __str__(self):
        return "Error while accessing {}: {}".format(self.path, self.error)

    def report(self):
        output.error("Error while accessing the secrets file")
        output.tabular("file", self.path, red=True)
        output.tabular("message", self.error)


class CorruptDataError(ReportingException):
    """The store file is malformed or a ciphertext is truncated."""

    kind = ErrorKind.CORRUPT_DATA
    path: str
    message: str

    @classmethod
    def from_context(cls, message, path=None):
        self = cls()
        self.message = message
        self.path = str(path) if path is not None else None
        return self

    def __str__(self):
        if self.path:
            return "{}: {}".format(self.path, self.message)
        return self.message

    def report(self):
        output.error("Corrupt secrets data")
        if self.path:
            output.tabular("file", self.path, red=True)
        output.tabular("message", self.message)
