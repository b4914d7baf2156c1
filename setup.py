from setuptools import setup, find_packages

setup(
    name='quantile-cut-points',
    version='1.0',
    packages=find_packages(exclude=['tests', 'experiments']),
    py_modules=[
        'bin_count_policy',
        'binning',
        'cut_allocation',
        'discretizer',
        'errors',
        'missing_values',
        'quantile_cut_points',
        'random_stream',
        'range_ordering',
        'splitting_ranges',
    ],
    description='Quantile cut-point discovery and discretization for histogram learners',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    python_requires='>=3.10',
    install_requires=['numpy>=1.22'],
    extras_require={
        'test': ['pytest>=7'],
        'experiments': ['pandas>=1.5'],
    },
)
