from setuptools import setup, find_packages
import re

# Read version from wagelevels/__init__.py
with open('wagelevels/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='wage-levels',
    version=version,
    packages=find_packages(exclude=['tests', 'tests.*']),
    package_data={
        'wagelevels': ['reference_data/*.yaml', 'reference_data/tax_rules/*.yaml'],
    },
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
        'rich>=13.0',
    ],
    extras_require={
        'mcp': [
            'mcp[cli]>=1.0.0,<2',
        ],
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'wage-levels=wagelevels.cli.__main__:main',
            'wage-levels-mcp=wagelevels.mcp.server:run_server',
        ],
    },
    author='Personal',
    description='Prevailing wage level, take-home pay and cost-of-living comparison tools.',
    python_requires='>=3.10',
)
