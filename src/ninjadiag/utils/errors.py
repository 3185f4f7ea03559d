class NinjaDiagError(Exception):
    """Base class for ninjadiag errors outside the (total) parser core."""


class ConfigError(NinjaDiagError):
    """
    Raised when ninjadiag.yaml cannot be read, is not valid YAML, or holds
    values the settings models reject.
    """
    def __init__(self, message: str, path: str = None):
        self.message = message
        self.path = path
        ctx = f" (in '{path}')" if path else ""
        super().__init__(f"Config Error: {message}{ctx}")
