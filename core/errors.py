class EditorError(Exception):
    """Base exception for editor errors"""
    pass

class ParseError(EditorError):
    """A source file is not valid JSON"""
    def __init__(self, relative_path: str, message: str):
        super().__init__(f"{relative_path}: {message}")
        self.relative_path = relative_path

class MissingResourceError(EditorError):
    """Keyword dictionary could not be loaded"""
    pass

class ReadFailure(EditorError):
    """Reading a batch of source files failed"""
    pass

class WriteFailure(EditorError):
    """Writing a batch of output files failed"""
    pass

class EmptySelectionError(EditorError):
    """A transform was requested with nothing selected"""
    pass

class NothingToSaveError(EditorError):
    """Save requested before any parameters were loaded"""
    pass

class SessionFormatError(EditorError):
    """Session file is not a list of parameter records"""
    pass
