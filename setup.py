from pathlib import Path

from setuptools import find_packages, setup

# Read the long description from README.md
long_description = Path(__file__).with_name("README.md").read_text(
    encoding="utf-8"
)

if __name__ == "__main__":
    setup(
        name="exactlp",
        version="0.1.0",
        description=(
            "Algebraic LP/MILP modeling with exact rational coefficients"
        ),
        long_description=long_description,
        long_description_content_type="text/markdown",
        package_dir={"": "src"},
        packages=find_packages(where="src"),
        python_requires=">=3.9",
        install_requires=["ortools"],
        include_package_data=True,
    )
