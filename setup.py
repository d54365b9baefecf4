from setuptools import setup, find_packages

setup(
    name="finsentiment",
    version="0.1.0",
    packages=find_packages(include=["finsentiment", "finsentiment.*"]),
    install_requires=[
        "numpy>=1.20.0",
        "pandas>=1.3.0",
        "scikit-learn>=1.0.0",
        "scipy>=1.7.0",
        "nltk>=3.6.0",
        "joblib>=1.0.0",
        "PyMuPDF>=1.20.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "finsentiment=finsentiment.main:main",
        ],
    },
    python_requires=">=3.8",
    author="Your Name",
    description="Paragraph-level sentiment scoring of financial PDF reports",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
