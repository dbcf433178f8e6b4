from setuptools import setup, find_packages

setup(
    name="sga",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        # System
        'python-dotenv',

        # Data Handling
        'numpy',
        'pandas',

        # Visualization
        'matplotlib',
    ],
    extras_require={
        'test': [
            'pytest>=7.0.0',
            'pytest-cov>=4.0.0',
            'pytest-mock>=3.10.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'sga = sga.cli.sga:main',
        ],
    },
    include_package_data=True,
    description="SGA - Simple Genetic Algorithm for two-variable function optimization",
    author="Grant Morgan",
    author_email="grant.t.morgan@gmail.com",
)
