"""Work Time Tracker - per-task stopwatches with save/restore and text export"""

__version__ = "2.0.0"
