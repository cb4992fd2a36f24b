from .move import MoveStage, move

__all__ = ["MoveStage", "move"]
