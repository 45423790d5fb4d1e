from setuptools import setup, find_packages
setup(
    name="namespace_locator",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=["numpy", "pycryptodome", "flask"],
    extras_require={"tests": ["pytest"]},
    python_requires=">=3.9",
)
