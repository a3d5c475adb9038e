"""Exception hierarchy."""


class BlockportError(Exception):
    pass


class InvalidInputError(BlockportError):
    pass


class UnknownBuilderError(BlockportError):
    pass


class ConversionError(BlockportError):
    pass


class CaptureError(BlockportError):
    pass
