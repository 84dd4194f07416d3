from .events_db import fetch_history, save_events, save_events_safely

__all__ = ["fetch_history", "save_events", "save_events_safely"]
