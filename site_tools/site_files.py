#!/usr/bin/env python3

# Standard Library
import os

# PIP3 modules
import yaml


#============================================
def write_text_file_if_changed(path: str, content: str, dry_run: bool = False) -> bool:
	"""
	Write a text file only if content changed.

	Args:
		path (str): File path.
		content (str): New file content.
		dry_run (bool): If True, report the change but do not write.

	Returns:
		bool: True if the file was (or, in dry run, would be) written.
	"""
	if os.path.exists(path):
		with open(path, 'r', encoding='utf-8') as f:
			existing = f.read()
		if existing == content:
			return False

	if dry_run:
		return True

	parent_dir = os.path.dirname(path)
	if parent_dir:
		os.makedirs(parent_dir, exist_ok=True)

	with open(path, 'w', encoding='utf-8') as f:
		f.write(content)
	return True


#============================================
def yaml_dump(data) -> str:
	"""
	Dump YAML with stable formatting.

	Args:
		data (dict): YAML dict.

	Returns:
		str: YAML text.
	"""
	out = yaml.safe_dump(
		data,
		sort_keys=False,
		default_flow_style=False,
		width=100,
		allow_unicode=True,
	)
	return out


#============================================
def csv_quote(value: str, force: bool = False) -> str:
	"""
	Quote a CSV value when it holds a delimiter, quote or line break.

	Args:
		value (str): Raw value.
		force (bool): Always wrap the value in quotes.

	Returns:
		str: CSV-safe value.
	"""
	value = str(value or '')
	if force or ',' in value or '"' in value or '\n' in value or '\r' in value:
		value = '"' + value.replace('"', '""') + '"'
	return value


if __name__ == '__main__':
	assert csv_quote('a,b') == '"a,b"'
	assert csv_quote('say "hi"') == '"say ""hi"""'
	assert csv_quote('plain') == 'plain'
	assert csv_quote('plain', force=True) == '"plain"'
