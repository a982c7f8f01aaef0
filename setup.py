from setuptools import find_namespace_packages, setup

VERSION = "0.1.0"

requirements = open("requirements.txt").readlines()

if __name__ == "__main__":
    setup(
        name='ormgen',
        version=VERSION,
        packages=find_namespace_packages(include=['ormgen', 'ormgen.*']),
        package_data={'ormgen': ['templates/tree/*']},
        license='MIT',
        description='ormgen - generate ORM schema declarations from an introspected database schema',
        long_description=open('README.md').read(),
        long_description_content_type='text/markdown',
        classifiers=[
            'Development Status :: 3 - Alpha',
            'Intended Audience :: Developers',
            'License :: OSI Approved :: MIT License',
            'Programming Language :: Python :: 3',
        ],
        install_requires=requirements,
        extras_require={
            'test': ['pytest>=8.0'],
        },
        entry_points={
            'console_scripts': ['ormgen=ormgen.cli.main:run_ormgen'],
        },
        python_requires='>=3.9',
    )
