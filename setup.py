from setuptools import setup, find_packages

setup(
    name="supertux_levels",
    version="0.1.0",
    description="Loader and creator for SuperTux level and worldmap documents",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    package_data={
        "supertux_levels.level_data": ["*.stl", "*.stwm"],
    },
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.24",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "supertux-levels=supertux_levels.main:main",
        ],
    },
)
