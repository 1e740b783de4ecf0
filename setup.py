# setup.py - 打包与安装配置

from setuptools import setup, find_packages

setup(
    name="wordle-net",
    version="0.1.0",
    description="Line-oriented TCP Wordle server, one session thread per client",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
        ],
        "dev": [
            "black==23.9.1",
            "flake8==6.1.0",
            "isort==5.12.0",
            "pytest==7.4.0",
            "pytest-cov==4.1.0",
            "pre-commit==3.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "wordle-server=wordle_net.server.main:main",
        ],
    },
)
