"""ALMANAC test suite.

Folder taxonomy
- unit/  : Isolated, fast checks of a single module/class/function.
- e2e/   : The ``almanac`` command line, invoked through Click's test runner.

General guidance
- Every test runs in UTC on a frozen clock (see ``conftest.py``); tests that
  depend on DST switch the process zone explicitly.
- Property-based tests live with the layer they exercise and use @pytest.mark.property.
"""
