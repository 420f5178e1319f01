"""Custom exception hierarchy for the covering solver."""


class PolycoverError(Exception):
    """Base exception for solver failures."""


class PuzzleFormatError(PolycoverError):
    """Raised when a board or piece description cannot be parsed."""


class BoardFormatError(PuzzleFormatError):
    """Raised on an unknown board symbol or an oversized board."""


class PieceFormatError(PuzzleFormatError):
    """Raised on an unknown piece symbol or an oversized piece."""


class PlacementError(PolycoverError):
    """Raised when a piece would be placed outside the grid."""


class InfeasibleBoardError(PolycoverError):
    """Raised when no assignment of pieces covers every open cell."""


class ValidationError(PolycoverError):
    """Raised when a reported solution fails the replay checks."""


class CrossCheckError(PolycoverError):
    """Raised when the CP-SAT model ends without a usable status."""
