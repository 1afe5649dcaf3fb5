from setuptools import setup, find_packages

setup(
    name="EnclosingBallToolkit",
    version="0.1.0",
    author="Alessandro Fiorentino",
    author_email="alexfiore98@gmail.com",
    description="Minimum enclosing ball and circumscribed ball of points in D dimensions.",
    packages=find_packages(include=["EnclosingBallToolkit", "EnclosingBallToolkit.*"]),
    install_requires=[
        "numpy>=1.26.0",
        "matplotlib>=3.7.1",
        "scipy>=1.10.1",
        "tqdm>=4.65.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    python_requires=">=3.8",
)
