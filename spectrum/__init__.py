"""Pure spectrum ingestion and scheduling utilities.

This package intentionally avoids importing Django so it can be reused in
non-web contexts (scripts, notebooks) and tested in isolation.
"""
