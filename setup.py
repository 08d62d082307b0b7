import setuptools

NAME = "docxref"
REQUIREMENTS = "requirements/requirements-base.txt"

with open("README.md", "r") as fh:
    long_description = fh.read()


def _get_requirements(requirement_file):
    with open(requirement_file) as f:
        reqs = []
        for l in f.read().splitlines():
            if l.strip():
                reqs.append(l)
        return reqs


setuptools.setup(
    name=NAME,
    version="0.1.0",
    author="docxref Developers",
    description="docxref turns plain-text mentions of declared ids in XML documentation into <link> cross-references.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    install_requires=_get_requirements(REQUIREMENTS),
    extras_require={"test": ["pytest"]},
    packages=setuptools.find_packages(),
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    entry_points={
        "console_scripts": [
            "docxref = docxref.cli:main",
        ],
    },
    python_requires=">=3.8",
)
