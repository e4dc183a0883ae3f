pytest_plugins = ["fsprovider.pytest_plugin"]
