"""Custom exceptions for gainslots."""


class LotParseError(Exception):
    """Base exception for realized-gains statement parsing errors."""


class UnrecognizedFormatError(LotParseError):
    """Raised when the input has no recognizable account or symbol header."""

    def __init__(self, line_count: int, message: str | None = None):
        self.line_count = line_count
        if message is None:
            message = (
                "input is empty"
                if line_count == 0
                else f"no account or symbol header found in {line_count} lines"
            )
        super().__init__(f"Unrecognized statement format: {message}")


class PDFParseError(LotParseError):
    """Raised when PDF text extraction fails."""

    def __init__(self, file_path: str, message: str):
        self.file_path = file_path
        super().__init__(f"PDF parse error for {file_path}: {message}")


class ExportError(LotParseError):
    """Raised when the lot ledger cannot be written."""

    def __init__(self, destination: str, message: str):
        self.destination = destination
        super().__init__(f"Export error for {destination}: {message}")


class IllegalTransitionError(LotParseError):
    """Raised when a parser stage attempts a state change its table forbids."""

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Illegal parser transition: {current} -> {target}")
