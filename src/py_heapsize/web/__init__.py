"""JSON web endpoint for heap-size probes.

This package provides a Flask application that reports heap-like
footprints over HTTP.  It is an **optional** extra — install with::

    pip install py-heapsize[web]

The ``create_app`` factory in ``app.py`` serves two endpoints:

- ``GET /api/heap`` — footprint of the serving process.
- ``GET /api/heap/<pid>`` — footprint of another process.
"""
