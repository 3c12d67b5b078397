from setuptools import setup

setup(name='votecast',
      version='0.1.0',
      description='Election result projection from partial precinct counts',
      packages=['votecast'],
      python_requires='>=3.7',
      install_requires=[
          'click',
          'numpy',
          'pandas>=1.4',
          'PyYAML',
      ],
      extras_require={
          'test': ['pytest'],
      })
