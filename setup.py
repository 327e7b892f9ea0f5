#
# webbooker distribution
#

from setuptools import setup

VERSION = '0.3.0'

setup (
    name = 'webbooker',
    version = VERSION,

    package_dir = {'': 'src'},

    packages = [
        'webbooker',
        'webbooker.parsers',
        'webbooker.writers',
    ],

    scripts = [
        'scripts/webbooker',
    ],

    install_requires = [
        'beautifulsoup4',
        'lxml',
        'pillow>=8.3.2',
        'requests',
        'libgutenberg>=0.8.11',
    ],

    data_files = [
        ('', ['README.md']),
    ],

    # metadata for upload to PyPI

    description = "Turn scraped web chapters into an EPUB.",
    long_description = open ('README.md', encoding='utf-8').read (),
    long_description_content_type = 'text/markdown',
    license = "GPL v3",
    keywords = "ebook epub web serial scraper html xhtml",

    classifiers = [
        "Topic :: Text Processing",
        "License :: OSI Approved :: GNU General Public License (GPL)",
        "Environment :: Console",
        "Operating System :: OS Independent",
        "Intended Audience :: Other Audience",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
    ],

    platforms = 'OS-independent'
)
