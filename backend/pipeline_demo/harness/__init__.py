# Harness package init
"""
Pipeline Demo — Test Harness
=============================

What:  Drives the service over loopback HTTP and reports pass/fail as an exit code.

Modules:
    - client.py:  HarnessClient.make_request() → HarnessResponse(status, body)
    - suites.py:  check() plus the passing contract and failure scenarios
    - config.py:  HarnessConfig (which suite, which port, timings)
    - runner.py:  run_suite(): start server → run steps → exit code → stop server
"""
