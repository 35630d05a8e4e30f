from stablepage.models.record import RecordRow

__all__ = ["RecordRow"]
