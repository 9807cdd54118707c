from setuptools import setup, find_packages

setup(
    name="reeds-shepp-visualizer",
    version="1.0.0",
    description="Interactive Reeds-Shepp path visualizer",
    packages=find_packages(include=["rsviz", "rsviz.*"]),
    py_modules=["main", "doctor"],
    include_package_data=True,
    install_requires=[
        "pygame>=2.1.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": ["rsviz=main:main"],
    },
    python_requires=">=3.8",
)
