import os

# Keep telelog output off the pytest console unless asked for explicitly.
os.environ.setdefault("HEITX_ENGINE_DISABLE_CONSOLE", "1")
