from setuptools import setup, find_packages

setup(
    name="ubuntu-ssh",
    version="0.1.0",
    packages=find_packages(include=["ubuntu_ssh", "ubuntu_ssh.*"]),
    install_requires=[
        "pulumi>=3.0.0",
        "pulumi-aws>=6.0.0",
        "requests>=2.28.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    python_requires=">=3.8",
    description="Pulumi program for a single SSH-reachable Ubuntu EC2 instance",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
