# setup.py
from setuptools import setup, find_packages

install_requires = [
    # --- STATE & CONFIG ---
    "pydantic>=2.0.0",
    "python-dotenv>=1.0.0",
    "pyyaml>=6.0.0",

    # --- CONSOLE UI ---
    "rich>=13.0.0",
]

extras_require = {
    # --- TESTS ---
    "test": [
        "pytest",
        "pytest-asyncio==1.3.0",
    ],
}

setup(
    name="storefront",
    version="0.1.0",
    description="Storefront: client-side shop demo driven by a single state machine",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"storefront.shared.config": ["settings/*.yaml"]},
    install_requires=install_requires,
    extras_require=extras_require,
    entry_points={
        "console_scripts": [
            "storefront=storefront.app.main:main",
        ],
    },
    python_requires=">=3.11",
)
