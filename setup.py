from setuptools import setup, find_packages

setup(
    name="ezclip",
    version="1.20.0",
    packages=find_packages(exclude=["ezclip.tests", "ezclip.tests.*"]),
    description="Copy files, command output and piped text between the clipboard and the filesystem.",
    author="Max Carlson",
    author_email="carlsonamax@gmail.com",
    install_requires=[
        "rich",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "ezclip=ezclip.cli:main",
        ]
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
