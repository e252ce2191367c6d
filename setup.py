from setuptools import setup, find_packages

setup(
    name='hoursViz',
    version='0.1.0',
    description='A CLI tool that turns employee time entries into an HTML report and a pie chart.',
    author='René Lachmann',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=[
        'requests',
        'tabulate',
        'python-dotenv',
        'markdown',
        'Pillow>=9.2',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'hoursviz=hoursviz.__main__:main',
        ],
    },
    include_package_data=True,
    package_data={
        '': ['hoursviz.env.example'],
    },
    python_requires='>=3.8',
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
    ],
)
