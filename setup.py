from setuptools import setup, find_packages

# Read long description from README
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="previewkit",
    version="0.1.0",
    author="PreviewKit Contributors",
    description="Scrubber-preview sprite sheets and WebVTT thumbnail indexes from video files",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/previewkit/previewkit",
    packages=find_packages(exclude=["tests", "tests.*", "examples"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Video",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    python_requires=">=3.8",
    install_requires=[
        "requests>=2.28.0",
        "yt-dlp>=2023.0.0",
        "Pillow>=9.1.0",
        "opencv-python-headless>=4.5.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "numpy>=1.21.0",
        ],
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "numpy>=1.21.0",
            "black>=23.0.0",
            "flake8>=6.0.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "previewkit=previewkit.cli:main",
        ],
    },
    include_package_data=True,
    keywords="video thumbnails sprite-sheet webvtt seek-preview scrubber",
    project_urls={
        "Bug Reports": "https://github.com/previewkit/previewkit/issues",
        "Source": "https://github.com/previewkit/previewkit",
        "Documentation": "https://github.com/previewkit/previewkit#readme",
    },
)
