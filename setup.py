import os

from setuptools import setup, find_packages

version_file = os.path.join(os.path.dirname(__file__), "dcr_codecs", "version.py")
with open(version_file, "r") as f:
    exec(f.read())

readme_file = os.path.join(os.path.dirname(__file__), "README.md")
with open(readme_file, "r") as f:
    long_description = f.read()

setup(
    name="dcr_codecs",
    version=__version__,  # noqa: F821 -- loaded by 'exec' above
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    description=(
        "Bit-exact codecs for AVC, HEVC and Dolby Vision decoder "
        "configuration records."
    ),
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="GPL-3.0-only",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Operating System :: POSIX :: Linux",
        "Operating System :: Microsoft :: Windows",
        "Operating System :: MacOS",
        "Programming Language :: Python :: 3",
        "Topic :: Multimedia :: Video",
    ],
    keywords="mp4 isobmff avcC hvcC dvcC h264 hevc dolby-vision",
    python_requires=">=3.6",
    install_requires=[
        "bitarray>=1.2",
        "sentinels",
    ],
    extras_require={
        "tests": [
            "pytest",
            "mock",
        ],
    },
    entry_points={
        "console_scripts": [
            "dcr-record-viewer=dcr_codecs.scripts.dcr_record_viewer:main",
        ],
    },
)
