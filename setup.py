from setuptools import find_packages, setup

with open("README.md", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="symint",
    version="0.1.0",
    packages=find_packages(where="src"),  # Tells setuptools to look for packages in the 'src' directory
    package_dir={"": "src"},  # Sets the root of packages to 'src'
    description="Symbolic integration: heuristic layers with a Risch algorithm fallback",
    long_description=long_description,
    long_description_content_type="text/markdown",
    install_requires=[
        "numpy",
        "sympy>=1.12",
    ],
    extras_require={
        "dev": [
            "pytest>=5.2",  # Dependencies for testing
            "matplotlib",  # debug.logger plots
        ],
    },
    python_requires=">=3.8",
)
