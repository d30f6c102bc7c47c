from plotstat.adapters.normalize import aesthetics_from_data

__all__ = ["aesthetics_from_data"]
