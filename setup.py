from setuptools import setup, find_packages

setup(
    name="py-css-validator",
    version="1.0.0",
    packages=find_packages(),
    install_requires=[
        'psutil',
        'aiofiles',
        'orjson',
        'typing-extensions'
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
            'pytest-xdist',
            'pytest-timeout'
        ]
    },
    entry_points={
        'console_scripts': [
            'css-validator=css_validator.cli:main',
        ],
    },
    package_data={
        'css_validator': ['vendor/*.jar'],
    },
    python_requires='>=3.7',
    author="Kenneth Hanks",
    author_email="fourfigs@gmail.com",
    description="Validate CSS against W3C conformance profiles using the W3C CSS validation engine",
    long_description=open('README.md').read(),
    long_description_content_type="text/markdown",
    url="https://github.com/fourfigs/py-css-validator",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
