from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="prime-onboarding-hub",
    version="0.1.0",
    author="Prime Onboarding Team",
    description="Reconciles onboarding records with TCS iON community membership and serves them over HTTP",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Development Status :: 3 - Alpha",
        "Framework :: Flask",
    ],
    python_requires=">=3.9",
    install_requires=[
        "requests>=2.27.0",
        "pandas>=2.0.0",
        "python-dotenv>=0.15.0",
        "SQLAlchemy>=2.0.0",
        "psycopg2-binary>=2.9.0",
        "Flask>=2.2.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            # Server
            "onboarding-server=scripts.onboarding.run_server:main",

            # Maintenance scripts
            "onboarding-reconcile=scripts.onboarding.reconcile_onboarding:main",
            "onboarding-export=scripts.onboarding.export_onboarding_records:main",
            "onboarding-seed=scripts.onboarding.seed_onboarding_records:main",
        ],
    },
)
