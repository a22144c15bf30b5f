[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ravenbvh"
version = "0.2.0"
description = "Bounding volume hierarchies, a top-level acceleration structure and ray casting over triangle meshes"
requires-python = ">=3.10"
dependencies = []
keywords = ["bvh", "ray casting", "ray tracing", "tlas", "acceleration structure", "sah"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["ravenbvh"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
