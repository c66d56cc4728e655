#!/usr/bin/env python
"""hsnlp: Hock-Schittkowski test problems on differentiable-function models.

hsnlp assembles constrained nonlinear programs from differentiable functions
whose derivatives are held in dense or sparse format, exposes them to
registered solvers and checks results against known optima.
"""
import os
import glob

from setuptools import setup   # enables 'python setup.py develop'

DOCLINES = __doc__.split("\n")

CLASSIFIERS = """\
Development Status :: 4 - Beta
Intended Audience :: Science/Research
Intended Audience :: Developers
License :: OSI Approved :: GNU Lesser General Public License v3 (LGPLv3)
Programming Language :: Python
Programming Language :: Python :: 3
Topic :: Software Development
Topic :: Scientific/Engineering
Operating System :: POSIX
Operating System :: Unix
Operating System :: MacOS
"""

packages_list = ['hsnlp',
                 'hsnlp.drivers',
                 'hsnlp.model',
                 'hsnlp.optimize',
                 'hsnlp.problems',
                 'hsnlp.tools']

scripts_list = glob.glob(os.path.join('hsnlp', 'drivers', 'nlp_*.py'))

setup(
    name='hsnlp',
    version="0.1.0",
    description=DOCLINES[0],
    long_description="\n".join(DOCLINES[2:]),
    license='LGPL',
    platforms=["Linux", "Mac OS-X", "Unix"],
    classifiers=list(filter(None, CLASSIFIERS.split('\n'))),
    python_requires='>=3.6',
    install_requires=['numpy', 'scipy>=1.1'],
    extras_require={'test': ['pytest']},
    package_dir={"hsnlp": "hsnlp"},
    packages=packages_list,
    scripts=scripts_list,
    zip_safe=False
)
