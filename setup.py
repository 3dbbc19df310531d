"""Setup configuration for pve-api-client."""

from pathlib import Path
from setuptools import find_packages, setup

# Read the README file
readme_path = Path(__file__).parent / "README.md"
long_description = readme_path.read_text(encoding="utf-8") if readme_path.exists() else ""

# Read requirements
requirements_path = Path(__file__).parent / "requirements.txt"
if requirements_path.exists():
    with open(requirements_path, encoding="utf-8") as f:
        requirements = [
            line.strip()
            for line in f
            if line.strip() and not line.startswith("#")
        ]

    # Filter out development dependencies
    install_requires = []
    extras_require = {
        "dev": [],
        "test": [],
    }

    for req in requirements:
        if any(dev_keyword in req.lower() for dev_keyword in ["mypy", "types-", "pytest", "ruff", "black"]):
            if "pytest" in req:
                extras_require["test"].append(req)
            else:
                extras_require["dev"].append(req)
        else:
            install_requires.append(req)
else:
    install_requires = [
        "requests>=2.28.0",
        "PyYAML>=6.0",
    ]
    extras_require = {
        "test": ["pytest>=7.0.0"],
    }

setup(
    name="pve-api-client",
    version="1.0.0",
    description="Thin Proxmox VE REST API client with API token authentication",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="pve-api-client Team",
    author_email="support@example.com",
    url="https://github.com/example/pve-api-client",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=install_requires,
    extras_require=extras_require,
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "pve-api=pve_api_client.core.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: System Administrators",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: System :: Systems Administration",
    ],
    keywords="proxmox pve api client token virtualization",
    zip_safe=False,
)
