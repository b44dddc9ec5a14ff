from setuptools import setup

desc = '''\
Asynchronous pixiv app API client.\
'''

setup(
    name="pxvapi",
    version="0.1.0",
    description=desc,
    author="KIodine",
    license="MIT",
    packages=["pxvapi"],
    python_requires=">=3.8",
    install_requires=[
        "aiohttp",
        "pytz",
        "yarl",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    zip_safe=False
)
