from setuptools import setup, find_packages

setup(
    name="p3mauve",
    version="0.1.0",
    description="Genome alignment workflow: fetch genomes, run Mauve and convert XMFA alignments to JSON",
    packages=find_packages(),
    install_requires=[
        "biopython",
        "pandas",
        "tqdm",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'p3-mauve=p3mauve.pipeline:main',
            'xmfa2json=p3mauve.pipeline:xmfa_main',
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
    ],
    python_requires=">=3.8",
)
