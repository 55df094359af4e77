from setuptools import setup, find_packages

requirements = [  # pip
    'numpy',
    'configobj',
    'matplotlib',
]

test_requirements = [
    'pytest',
]

packages = find_packages(exclude=('doc', 'tests*'))
setup(
    name='ClearThresh',
    version='1.0.0',
    description='Clipping of N-dimensional arrays to one or two (absolute) thresholds',
    python_requires='>=3.8',
    install_requires=requirements,
    extras_require={'test': test_requirements},
    packages=packages,
    entry_points={
        'console_scripts': [
            'clearthresh-demo = ClearThresh.Scripts.threshold_demo:main',
        ],
    },
    url='',
    license='GPLv3',
    include_package_data=True,
    package_data={'ClearThresh.config': ['*.cfg']},
    zip_safe=False
)
