[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "okxkit"
version = "0.1.0"
description = "Request models, websocket channel messages and order book maintenance for the OKX v5 trading API"
requires-python = ">=3.10"
dependencies = []
keywords = ["okx", "trading", "exchange", "orderbook", "websocket", "crypto"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Financial and Insurance Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Investment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["okxkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
