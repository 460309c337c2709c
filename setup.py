from setuptools import setup

setup(
    name="tcp_client",
    version="1.0.0",
    packages=["tcp_client", "tests"],
    description="Command line client for a text transform TCP server",
    long_description=open('README.md', 'r').read(),
    long_description_content_type="text/markdown",
    license="MIT",
    classifiers=["Development Status :: 5 - Production/Stable",
                 "Environment :: Console",
                 "Intended Audience :: Developers",
                 "License :: OSI Approved :: MIT License",
                 "Operating System :: MacOS :: MacOS X",
                 "Operating System :: POSIX :: Linux",
                 "Operating System :: POSIX :: BSD :: FreeBSD",
                 "Programming Language :: Python",
                 "Programming Language :: Python :: 3",
                 "Topic :: Software Development"],
    python_requires=">=3.6",
    test_suite="tests",
    entry_points="""\
    [console_scripts]
    tcp_client = tcp_client.cli:run
    """,
    zip_safe=True
)
