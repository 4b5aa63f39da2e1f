"""Package configuration for jira-burndown-metrics.

This file defines installation metadata and console entry points.
"""

import os

import setuptools

# Defer reading README/requirements until setup is actually executed.


def main():
    """Entrypoint for invoking setuptools.setup with package metadata."""

    here = os.path.abspath(os.path.dirname(__file__))

    try:
        with open(os.path.join(here, "README.md"), encoding="utf-8") as f:
            long_description = f.read()
    except OSError:
        long_description = ""

    # Only production dependencies; requirements.txt pulls in the dev ones too
    try:
        with open(os.path.join(here, "requirements-prod.txt"), encoding="utf-8") as f:
            install_requires = [
                line.strip()
                for line in f.read().splitlines()
                if line.strip()
                and not line.strip().startswith("#")
                and not line.strip().startswith("-r ")
            ]
    except OSError:
        install_requires = []

    setuptools.setup(
        name="jira-burndown-metrics",
        version="0.1",
        description="Burn-down, velocity and work item change data from JIRA item snapshots",
        long_description=long_description,
        long_description_content_type="text/markdown",
        license="MIT",
        keywords="agile jira burndown velocity metrics",
        packages=setuptools.find_packages(exclude=["contrib", "docs", "tests*"]),
        install_requires=install_requires,
        extras_require={
            "test": ["pytest", "pytest-mock"],
        },
        python_requires=">=3.8",
        entry_points={
            "console_scripts": [
                "jira-burndown-metrics=jira_burndown_metrics.cli:main",
            ],
        },
    )


if __name__ == "__main__":
    main()
