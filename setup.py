from setuptools import find_packages, setup

setup(
    name='s3fetch',
    packages=find_packages(exclude=['test']),
    version='1.0',
    python_requires='>=3.8',
    description='download an S3 object to disk with hash verification and atomic commit',
    license='MIT',
    install_requires=[
        'boto3',
        'botocore',
        'tqdm',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': ['download-object=s3fetch.__main__:cli'],
    },
)
