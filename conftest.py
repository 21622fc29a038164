import pytest

def pytest_addoption(parser):
    parser.addoption("--quick", action="store_true",
                     default=False, help="skip the slow randomized diff and patch tests")
    parser.addoption("--slow", action="store_true",
                     default=False, help="only run the slow randomized diff and patch tests")


def pytest_collection_modifyitems(config, items):
    if not config.getoption("--slow"):
        # Without --slow, run everything not deselected by --quick
        return
    # --slow runs only the tests using the slow fixture (random diff and patch pairs)
    skip_quick = pytest.mark.skip(reason="skipping all tests that are not slow")
    for item in items:
        if 'slow' not in item.fixturenames:
            item.add_marker(skip_quick)
