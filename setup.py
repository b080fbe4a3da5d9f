from setuptools import setup, find_packages


install_requires = [
    'PyYAML>=3.0',
    'Pillow>=8,!=8.3.0,!=8.3.1;python_version=="3.9"',
    'Pillow>=9;python_version=="3.10"',
    'Pillow>=10;python_version=="3.11"',
    'Pillow>=10.1;python_version=="3.12"',
    'Pillow>=11;python_version=="3.13"',
    'requests',
]

tests_require = [
    'pytest',
]


setup(
    name='MapView',
    version="1.0.0",
    description='Tile grid, projection and tile cache core for slippy map views',
    long_description=open('DESIGN.md').read(),
    long_description_content_type='text/markdown',
    license='Apache Software License 2.0',
    packages=find_packages(include=['mapview', 'mapview.*']),
    include_package_data=True,
    install_requires=install_requires,
    extras_require={
        'test': tests_require,
    },
    python_requires='>=3.9',
    classifiers=[
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: Scientific/Engineering :: GIS",
    ],
    zip_safe=False
)
