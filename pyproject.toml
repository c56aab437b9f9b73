[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ogun"
version = "0.0.1"
description = "Additive wavetable synthesis voice with curve-shaped harmonic spectra and cross-faded table updates"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["synthesis", "wavetable", "additive", "fft", "audio", "dsp"]
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
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["ogun"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
