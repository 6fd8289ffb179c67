import logging
import re
import subprocess
from pathlib import Path
from typing import List

from setuptools import setup, find_packages

logger = logging.getLogger(__name__)
console_handler = logging.StreamHandler()

logger.addHandler(console_handler)
logger.setLevel(logging.DEBUG)

HERE = Path(__file__).parent


def post_install():
    """Implement post installation routine"""
    with open(HERE / "requirements.txt") as f:
        install_requires = f.read().splitlines()

    install_requires = check_requirements(install_requires)

    return install_requires


def check_requirements(install_requires: List[str]):
    installed_packages_idx = []
    for idx, package in enumerate(install_requires):
        if "git" in package or "--" in package:
            result = subprocess.run(
                f"pip install {package}", shell=True, capture_output=True, text=True
            )
            logger.info(f"{result.stdout}")
            if result.stderr != "":
                logger.error(f"{result.stderr}")
            installed_packages_idx.append(idx)
    for idx in installed_packages_idx:
        install_requires[idx] = ""
    install_requires = [x.strip() for x in install_requires if x.strip() and not x.startswith("#")]
    return install_requires


def get_version():
    file = HERE / "card_counter" / "__init__.py"
    return re.search(
        r'^__version__ *= *[\'"]([^\'"]*)[\'"]', file.read_text(encoding="utf-8"), re.M
    )[1]


setup(
    name="card_counter",
    version=get_version(),
    description="Story point summaries and burndown charts for Trello and Jira boards",
    zip_safe=False,
    python_requires=">=3.9",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=post_install(),
    extras_require={
        "test": ["pytest>=7.4", "httpx>=0.25"],
    },
    entry_points={
        "console_scripts": ["card-counter=card_counter.frameworks.cli:main"],
    },
)
