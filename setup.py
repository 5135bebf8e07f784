from setuptools import setup, find_namespace_packages

setup(
    name='toolbelt-cli-libs',
    version='1.0.0',

    package_dir={'': 'src'},
    packages=find_namespace_packages(where='src', include=['toolbelt', 'toolbelt.*']),

    install_requires=[
        'termcolor>=2.4, <4',
        'colorama>=0.4.6, <2',
        'requests>=2.25, <3',
    ],

    zip_safe=True,

    description="Utilities for command-line programs: console logging, filesystem helpers and zip archives",

    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Environment :: Console",
        "Topic :: System :: Archiving :: Compression",
        "Typing :: Typed",
    ],
    python_requires='>=3.8',
)
