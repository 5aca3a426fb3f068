"""HTTP API for the data converter (FastAPI).

WHY: Browser front ends and other services need the conversion engine
over HTTP. The API is a thin wrapper: it validates the request, calls
the pure ``convert`` function and maps typed errors to HTTP responses.
"""
