"""Local HTTP server for pass-and-play games."""
