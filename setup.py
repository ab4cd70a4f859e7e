from setuptools import setup, find_packages

setup(
    name="colorstats",
    version="0.1.0",
    description="Average, most used and least used colors of raster images",
    packages=find_packages(exclude=("tests", "tests.*", "api", "examples")),
    package_data={"colorstats": ["config/*.yaml"]},
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "Pillow",
        "pyyaml",
        "requests",
    ],
    extras_require={
        "api": ["fastapi", "uvicorn", "python-multipart"],
        "test": [
            "pytest",
            "pytest-asyncio",
            "httpx",
            "fastapi",
            "python-multipart",
        ],
    },
    entry_points={
        "console_scripts": [
            "colorstats=colorstats.main:main",
        ],
    },
)
