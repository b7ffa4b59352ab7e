from setuptools import setup, find_packages

setup(name='codeplug',
      description='DMR codeplug model, text export and callsign DB encoder',
      packages=find_packages(include=["codeplug*"]),
      include_package_data=True,
      version='0.1.0',
      python_requires=">=3.10,<4",
      install_requires=[
          'requests',
          'lark',
      ],
      extras_require={
          'test': ['pytest', 'ddt'],
      },
      )
