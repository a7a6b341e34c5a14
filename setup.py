from setuptools import find_packages, setup

setup(
    name="orrery",
    version="0.1.0",
    description="Kepler orbits of a toy planetary scene, on a fixed-point clock",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "scipy",
        "kepler.py",
        "pyyaml",
        "astropy",
        "matplotlib",
    ],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["orrery = orrery.cli:main"]},
)
