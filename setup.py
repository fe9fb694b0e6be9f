from setuptools import setup, find_packages

setup(
    name="gitform",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "gitpython>=3.1.30",
        "pyyaml>=6.0",
        "tqdm>=4.64.0",
        "psutil>=5.9.0",
    ],
    extras_require={
        'test': [
            "pytest>=7.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'git-form=gitform.main:main',
        ],
    },
    description="Save the structure of your local Git repositories as YAML files and rebuild it anywhere",
    keywords="git, clone, repositories, backup, sync",
    python_requires='>=3.8',
)
