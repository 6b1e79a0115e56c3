"""
create-lafken test suite
========================

Test Modules
------------
- test_models.py: Tests for Pydantic option and context models
- test_engine.py: Tests for the Jinja2 template engine
- test_materializer.py: Tests for template tree materialization
- test_generator.py: Tests for the project creation pipeline
- test_cli.py: Tests for command-line interface

Running Tests
-------------
    # Run all tests
    pytest

    # Run specific module
    pytest tests/test_materializer.py

    # Run specific test class
    pytest tests/test_materializer.py::TestFailFast
"""
