import sys

TESTING = "test" in sys.argv or "pytest" in sys.modules
TEST_RUNNER = "sitegen.tests.runner.TestRunner"
