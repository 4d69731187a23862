#!/usr/bin/env python3

# Standard Library
import os
import re
import argparse

# local repo modules
import site_tools.csv_table
import site_tools.site_files


TEMPLATE_CSV = (
	'old_url,new_url\n'
	'/shipments/agl13,/agroverse-shipments/agl13\n'
	'/sunmint-tree-planting-pledges/agl13,/sunmint-tree-planting-pledges/agl13\n'
)

REDIRECT_PAGES_DIR = 'redirects'


#============================================
def parse_args():
	"""
	Parse command-line arguments.

	Returns:
		argparse.Namespace: Parsed arguments.
	"""
	parser = argparse.ArgumentParser(
		description='Normalize wix_redirects.csv into the data/redirects.yml redirect map',
	)

	parser.add_argument(
		'-i', '--input', dest='input_csv', required=False, type=str,
		default='wix_redirects.csv',
		help='Redirect mapping CSV (default: wix_redirects.csv)',
	)
	parser.add_argument(
		'-o', '--output', dest='output_yaml', required=False, type=str,
		default=os.path.join('data', 'redirects.yml'),
		help='Redirect map YAML output (default: data/redirects.yml)',
	)
	parser.add_argument(
		'-n', '--dry-run', dest='dry_run', help='Do not write files', action='store_true'
	)
	parser.add_argument(
		'-w', '--write', dest='dry_run', help='Write files (default)', action='store_false'
	)
	parser.set_defaults(dry_run=False)
	parser.add_argument(
		'-v', '--verbose', dest='verbose', required=False,
		action='store_true',
		help='Print every mapping',
	)

	args = parser.parse_args()
	return args


#============================================
def normalize_path(url: str) -> str:
	"""
	Normalize a redirect URL into a bare site path.

	Rules:
	- drop scheme and host
	- strip leading and trailing slashes
	- drop a trailing .html

	Args:
		url (str): URL or path.

	Returns:
		str: Path without leading slash (e.g. 'shipments/agl13').
	"""
	url = str(url or '').strip()
	url = re.sub(r'^https?://[^/]+', '', url)
	url = url.strip('/')
	url = re.sub(r'\.html$', '', url)
	return url


#============================================
def redirect_page_path(old_path: str) -> str:
	"""
	Get the site-relative location of the static redirect page for an old path.

	The page is an index.html inside a directory named after the old path,
	so the old URL keeps working without an extension.

	Args:
		old_path (str): Normalized old path.

	Returns:
		str: Path like 'redirects/shipments/agl13/index.html'.
	"""
	parts = [p for p in str(old_path or '').split('/') if p]
	if not parts:
		parts = ['index']
	return '/'.join([REDIRECT_PAGES_DIR] + parts + ['index.html'])


#============================================
def load_redirect_mappings(records: list) -> tuple:
	"""
	Turn mapping CSV records into normalized redirect mappings.

	Args:
		records (list): Records with old_url/new_url (or oldUrl/newUrl).

	Returns:
		tuple: (mappings, skipped). Mappings have keys from, to, page.
	"""
	mappings = []
	skipped = []
	for record in records:
		old_url = record.get('old_url') or record.get('oldUrl') or ''
		new_url = record.get('new_url') or record.get('newUrl') or ''
		if not old_url or not new_url:
			skipped.append(record)
			continue

		old_path = normalize_path(old_url)
		new_path = normalize_path(new_url)
		mappings.append({
			'from': '/' + old_path,
			'to': '/' + new_path,
			'page': redirect_page_path(old_path),
		})
	return (mappings, skipped)


#============================================
def build_redirect_map(
	input_csv: str = 'wix_redirects.csv',
	output_yaml: str = os.path.join('data', 'redirects.yml'),
	dry_run: bool = False,
	verbose: bool = False,
) -> list:
	"""
	Read the mapping CSV and write the redirect map YAML.

	A missing mapping CSV is replaced by a template to fill in.

	Args:
		input_csv (str): Redirect mapping CSV.
		output_yaml (str): Redirect map YAML output.
		dry_run (bool): If True, do not write files.
		verbose (bool): Print every mapping.

	Returns:
		list: Redirect mappings (empty when a template was created).
	"""
	if not os.path.isfile(input_csv):
		print(f'WARNING: {input_csv} not found, creating a template')
		print('  Format: old_url,new_url')
		site_tools.site_files.write_text_file_if_changed(input_csv, TEMPLATE_CSV, dry_run)
		return []

	records = site_tools.csv_table.read_csv_table(input_csv)
	print(f'Redirect mappings in {input_csv}: {len(records)}')

	mappings, skipped = load_redirect_mappings(records)
	for record in skipped:
		print(f'WARNING: skipping invalid redirect: {record}')

	if verbose:
		for m in mappings:
			print(f'  {m["from"]} -> {m["to"]}')
			print(f'    page: {m["page"]}')

	data = {'redirects': mappings}
	content = '# Generated from ' + os.path.basename(input_csv) + '. Edit that file instead.\n'
	content += site_tools.site_files.yaml_dump(data)
	wrote_yaml = site_tools.site_files.write_text_file_if_changed(output_yaml, content, dry_run)

	print(f'Redirects: {len(mappings)}')
	print(f'Skipped: {len(skipped)}')
	print(f'Wrote YAML: {wrote_yaml}')

	return mappings


#============================================
def main():
	"""
	Main entry point.
	"""
	args = parse_args()
	build_redirect_map(
		input_csv=args.input_csv,
		output_yaml=args.output_yaml,
		dry_run=args.dry_run,
		verbose=bool(args.verbose),
	)


if __name__ == '__main__':
	assert normalize_path('https://truesight.me/shipments/agl13.html') == 'shipments/agl13'
	assert normalize_path('/agroverse-shipments/agl13/') == 'agroverse-shipments/agl13'
	assert redirect_page_path('shipments/agl13') == 'redirects/shipments/agl13/index.html'
	main()
