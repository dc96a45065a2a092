"""chessrules: chess move legality, check detection and game sessions."""

__version__ = "0.1.0"
