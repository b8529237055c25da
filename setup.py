from setuptools import find_packages, setup

setup(
    name="mechanism-sim",
    version="0.1.0",
    description="Closed-loop PID + feedforward simulation of motor-driven arms and elevators",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.9",
    install_requires=["matplotlib"],
    extras_require={"test": ["pytest"]},
)
