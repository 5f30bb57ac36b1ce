# -*- coding: utf-8 -*-
import codecs
from setuptools import setup, find_packages


tests_require = [
    'Flask-Testing>=0.8.1',
    'pytest>=7.0',
]

setup(
    name='OSF-Client',
    version='0.1.0',
    packages=find_packages(exclude=['*tests*']),
    url='https://developer.osf.io/',
    license='MIT',
    author='OSF Client contributors',
    description='Read-only client for the Open Science Framework JSON-API',
    long_description=codecs.open('README.rst', encoding='utf-8').read(),
    tests_require=tests_require,
    install_requires=[
        'Flask>=2.2',
        'jsonschema>=3.0',
        'aniso8601>=0.84',
        'blinker>=1.3',
        'rfc3987',
        'requests>=2.20',
    ],
    python_requires='>=3.7',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Internet :: WWW/HTTP',
        'Topic :: Software Development :: Libraries :: Python Modules'
    ],
    zip_safe=False,
    extras_require={
        'docs': ['sphinx'],
        'tests': tests_require,
    }
)
