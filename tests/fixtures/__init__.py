"""Models, enums and casters shared by the test suites."""
