[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pngpaste"
version = "0.1.0"
description = "Read, check, find and vertically concatenate simple PNG images, and fetch numbered image strips over HTTP"
requires-python = ">=3.10"
dependencies = []
keywords = ["png", "crc", "zlib", "image", "concatenate", "fragments"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
catpng = "pngpaste.catpng:main"
findpng = "pngpaste.findpng:main"
pnginfo = "pngpaste.pnginfo:main"
pngfetch = "pngpaste.fetch:main"
paster = "pngpaste.paster:main"
ls-ftype = "pngpaste.lsutil:ftype_main"
ls-fname = "pngpaste.lsutil:fname_main"
pngtimes = "pngpaste.timing:main"

[tool.hatch.build.targets.wheel]
packages = ["pngpaste"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
