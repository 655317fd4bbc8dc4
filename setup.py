"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='jsdoctype',
	author='jsdoctype contributors',
	version='0.1.0',
	packages=['jsdoctype', ],
	entry_points={
		'console_scripts': ["jsdoctype = jsdoctype.cmdline:main"],
	},
	license='MIT',
	description='A structural model of JSDoc-declared JavaScript types, with checks for returns and calls',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Topic :: Software Development :: Quality Assurance",
		"Environment :: Console",
    ],
	python_requires='>=3.9',
	install_requires=[
		"booze-tools>=0.6.2.1",
	]
)
