#!/usr/bin/env python3

from setuptools import setup, find_packages
import os

directory = os.path.dirname(os.path.realpath(__file__))


if __name__ == "__main__":
    setup(
        name="rotprop",
        packages=find_packages(include=["rotprop", "rotprop.*"]),
        python_requires='>3.10.0',
        version="0.1.0",
        license="MIT",
        description="Euler angle / quaternion rotation properties for 3D editor inspectors",
        author="mirmik",
        author_email="mirmikns@yandex.ru",
        url="https://github.com/mirmik/termin",
        long_description=open(os.path.join(
            directory, "README.md"), "r", encoding="utf8").read(),
        long_description_content_type="text/markdown",
        keywords=["rotation", "euler", "quaternion", "inspector"],
        classifiers=[],
        include_package_data=True,
        install_requires=[
            "numpy",
            "scipy",
            "PyQt6>=6.4",
        ],
        extras_require={
            "test": ["pytest"],
        },
        zip_safe=False,
    )
