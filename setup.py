from pathlib import Path

from setuptools import find_packages, setup

ROOT = Path(__file__).parent

# Read requirements (ignore comments and recursive -r entries)
req_path = ROOT / "requirements.txt"
requirements = []
if req_path.exists():
    for line in req_path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#") or line.startswith("-r"):
            continue
        requirements.append(line)

readme = (ROOT / "README.md").read_text(encoding="utf-8") if (ROOT / "README.md").exists() else ""

setup(
    name="radiocms-scheduling",
    version="1.0.0",
    description="Radio program scheduling and conflict detection backend",
    long_description=readme,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=("tests", "tests.*", "docs")),
    python_requires=">=3.11,<4",
    install_requires=requirements,
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-flask>=1.2.0",
            "pytest-cov>=4.1.0",
            "black>=23.7.0",
            "flake8>=6.0.0",
            "mypy>=1.5.0",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Framework :: Flask",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    keywords="radio broadcast schedule programs conflict-detection",
    entry_points={
        "console_scripts": [
            "radiocms-server=run_server:main",
        ]
    },
    py_modules=["run_server"],
)
