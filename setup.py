# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="lish",
    version="0.1.0",
    description="A Lisp-flavoured interactive shell",
    packages=find_namespace_packages(include=["lish", "lish.*", "lish_lsp", "lish_lsp.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "lish=lish.__main__:main",
            "lish-ls=lish_lsp.server:ls.start_io",
        ],
    },
    zip_safe=False,
)
