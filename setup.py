from setuptools import find_packages, setup


setup(
    author="zipfgen developers",
    python_requires='>=3.10',
    description="Bounded Zipf key stream generator using rejection-inversion sampling",
    include_package_data=True,
    keywords='zipf',
    name='zipfgen',
    packages=find_packages(include=['zipfgen', 'zipfgen.*']),
    install_requires=[
        'numpy',
        'pandas',
        'plotly',
        'plotly_express',
        'kaleido',
    ],
    extras_require={
        'test': ['pytest', 'scipy'],
    },
    entry_points={
        'console_scripts': ['zipfgen=zipfgen.main:main'],
    },
    version='0.0.1',
)
