[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "i18n-audit"
version = "0.1.0"
description = "Audit rust-i18n projects for unused, missing and dynamic translation keys"
requires-python = ">=3.11"
keywords = ["i18n", "rust-i18n", "audit", "linter", "translations"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Internationalization",
    "Topic :: Software Development :: Quality Assurance",
]
dependencies = [
    "pyyaml>=6.0",
    "tabulate>=0.9",
    "termcolor>=2.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
i18n-audit = "i18n_audit.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["i18n_audit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
