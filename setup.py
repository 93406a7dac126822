from setuptools import find_packages, setup


def main():
    version = "1.0.0"
    packages = find_packages(include=["cexio", "cexio.*"], )
    install_requires = [
        "aiohttp>=3.8.5,<3.14",
        "pydantic>=2",
    ]
    extras_require = {
        "test": [
            "aioresponses>=0.7.4",
            "pytest",
        ],
    }

    setup(name="cexio",
          version=version,
          description="Asynchronous client for the CEX.io REST API",
          url="https://cex.io/rest-api",
          license="Apache 2.0",
          packages=packages,
          python_requires=">=3.8",
          install_requires=install_requires,
          extras_require=extras_require,
          )


if __name__ == "__main__":
    main()
