from pathlib import Path
from setuptools import setup, find_packages

root = Path(__file__).parent
version_text = root.joinpath('src', 'freshproxy', 'version.py').read_text()
version = version_text.split('VERSION = ', 1)[-1].strip().replace('-', '').replace("'", '')

setup(
    name = 'freshproxy',
    version = version,
    description = 'Proxies that re-resolve their target object on every operation',
    package_dir = {'': 'src'},
    packages = find_packages('src'),
    python_requires = '>=3.9',
    install_requires = [
        'loguru>=0.7.0',
        'pydantic>=2.0',
        'pydantic-settings>=2.0',
    ],
    extras_require = {
        'test': [
            'pytest',
        ],
    },
)
