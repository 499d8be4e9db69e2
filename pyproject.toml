[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sensornet"
version = "0.1.0"
description = "Sensor beacon payloads, gateway forwarding and dashboard logic for a small environmental sensor network"
requires-python = ">=3.10"
dependencies = []
keywords = ["sensor", "ble", "advertisement", "gateway", "iot", "telemetry"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Interface Engine/Protocol Translator",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sensornet-gateway = "sensornet.gateway:main"
sensornet-display = "sensornet.display:main"

[tool.hatch.build.targets.wheel]
packages = ["sensornet"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
