# setup.py
from setuptools import setup, find_packages

setup(
    name="axe-scout",
    version="0.1.0",
    description="Аудит доступности страниц и фрагментов через axe-core со сводным HTML-отчётом",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"axe_scout": ["templates/*.j2", "templates/*.css"]},
    install_requires=[
        "click>=8.1",
        "Jinja2>=3.1",
        "playwright>=1.40",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "axe-scout=axe_scout.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
