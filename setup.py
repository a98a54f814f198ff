from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="gitlab-runner-scaler",
    version="0.1.0",
    author="StepScale.io",
    author_email="info@stepscale.io",
    description="An external autoscaler metrics adapter that sizes GitLab runner fleets from pending jobs",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/stepscale/gitlab-runner-scaler",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["scaler_server"],
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
    install_requires=[
        "fastapi>=0.100.0",
        "uvicorn>=0.22.0",
        "requests>=2.28.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "httpx>=0.24.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "gitlab-scaler=scaler_server:main",
        ],
    },
)
