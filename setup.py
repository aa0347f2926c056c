from setuptools import setup, find_packages
import re

# Read version from nlpayroll/__init__.py
with open('nlpayroll/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='nl-payroll',
    version=version,
    packages=find_packages(include=['nlpayroll', 'nlpayroll.*']),
    package_data={
        'nlpayroll': ['tax_rules/*.yaml'],
    },
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
        'rich>=13.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'nl-payroll=nlpayroll.cli.__main__:main',
        ],
    },
    author='Personal',
    description='Dutch payroll gross-to-net calculation engine.',
    python_requires='>=3.10',
)
