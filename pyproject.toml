[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "airwaynav"
version = "0.1.0"
description = "CT volume slicing, airway surface geometry and 6-DoF camera tools for airway navigation"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["ct", "analyze", "airway", "slicer", "camera", "vtk", "medical-imaging"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Healthcare Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Medical Science Apps.",
    "Topic :: Scientific/Engineering :: Visualization",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
airwaynav = "airwaynav.navigator:main"

[tool.hatch.build.targets.wheel]
packages = ["airwaynav"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
