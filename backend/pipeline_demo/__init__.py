"""
Pipeline Demo — Application Package Initializer
================================================

What: Marks the `pipeline_demo` directory as a Python package.
Why:  Enables module imports like `from pipeline_demo.config import settings`.
Who:  Used by uvicorn, the test harness, the CLI and pytest.

Architecture Note:
    The service is deliberately tiny, but keeps a layered shape:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (Validation / IDs)     │  ← UserService
    ├─────────────────────────────────────┤
    │        Store (In-Memory Data)       │  ← UserStore, injected per app
    └─────────────────────────────────────┘

    The harness package sits beside the service and talks to it only over HTTP.
"""

__version__ = "1.0.0"
