"""
Test suite for PyFastResample package.

This test suite covers:
- Import tests for all modules and submodules
- Unit tests for filters, weight rows, textures, the resampler and the CLI
- Integration tests for downsampling scenarios and file workflows

Run with: pytest (or python run_tests.py)
"""
