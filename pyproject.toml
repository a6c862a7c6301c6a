[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "aprsgate"
version = "0.2.0"
description = "Building blocks for an APRS-IS internet gateway: APRS-IS client and forwarding task, task runner, board detection, monochrome OLED bitmaps and a millisecond timer."
requires-python = ">=3.10"
dependencies = []
keywords = ["aprs", "aprs-is", "ham radio", "lora", "igate", "oled", "ssd1306"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Telecommunications Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Ham Radio",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["aprsgate"]

[tool.hatch.build.targets.sdist]
include = ["aprsgate", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
