#!/usr/bin/env python3

# Standard Library
import os
import re
import argparse

# local repo modules
import site_tools.csv_table
import site_tools.site_files


SHIPMENTS_CSV_CANDIDATES = [
	os.path.join('assets', 'raw', 'Agroverse+Shipments_new.csv'),
	os.path.join('assets', 'raw', 'shipments_collection.csv'),
]

AGROVERSE = 'agroverse'
SUNMINT = 'sunmint'

TARGET_PREFIXES = {
	AGROVERSE: '/agroverse-shipments/',
	SUNMINT: '/sunmint-tree-planting-pledges/',
}

LEGACY_SHIPMENTS_PREFIX = '/shipments/'


#============================================
def parse_args():
	"""
	Parse command-line arguments.

	Returns:
		argparse.Namespace: Parsed arguments.
	"""
	parser = argparse.ArgumentParser(
		description='Identify old shipment URLs that need redirects and write wix_redirects.csv',
	)

	parser.add_argument(
		'-i', '--input', dest='input_csv', required=False, type=str,
		default=None,
		help='Shipments CSV (default: first of ' + ', '.join(SHIPMENTS_CSV_CANDIDATES) + ')',
	)
	parser.add_argument(
		'-o', '--output', dest='output_csv', required=False, type=str,
		default='wix_redirects.csv',
		help='Redirect mapping CSV output (default: wix_redirects.csv)',
	)
	parser.add_argument(
		'-c', '--conflicts', dest='conflicts_csv', required=False, type=str,
		default='wix_redirect_conflicts.csv',
		help='Unresolved conflicts CSV output (default: wix_redirect_conflicts.csv)',
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
		help='Print every identified redirect',
	)

	args = parser.parse_args()
	return args


#============================================
def choose_shipments_csv(candidates: list) -> str:
	"""
	Pick the first shipments CSV that exists.

	Args:
		candidates (list): Candidate paths, most preferred first.

	Returns:
		str: Existing path.
	"""
	for path in candidates:
		if path and os.path.isfile(path):
			return path
	raise FileNotFoundError('No shipments CSV found: ' + ', '.join(candidates))


#============================================
def is_true_flag(value: str) -> bool:
	"""
	Read a spreadsheet boolean column ('TRUE', 'true', ...).
	"""
	return str(value or '').strip().lower() == 'true'


#============================================
def extract_site_path(url: str) -> str:
	"""
	Get the path of a truesight.me URL (query and fragment dropped).

	Args:
		url (str): Full or partial URL.

	Returns:
		str: Path starting with '/', or '' when the URL is not on truesight.me.
	"""
	match = re.search(r'truesight\.me(/[^?#]*)', str(url or ''))
	if not match:
		return ''
	return match.group(1)


#============================================
def shipment_targets(shipment: dict) -> list:
	"""
	Get the new page paths a shipment should be reachable at.

	Args:
		shipment (dict): Shipment record.

	Returns:
		list: List of (new_path, redirect_type) tuples.
	"""
	shipment_id = str(shipment.get('shipment_contract_number', '') or '').strip().lower()
	if not shipment_id:
		return []

	targets = []
	if is_true_flag(shipment.get('is_cacao_shipment')):
		targets.append((TARGET_PREFIXES[AGROVERSE] + shipment_id, AGROVERSE))
	if is_true_flag(shipment.get('serialized')):
		targets.append((TARGET_PREFIXES[SUNMINT] + shipment_id, SUNMINT))
	return targets


#============================================
def derive_shipment_redirects(shipments: list) -> list:
	"""
	Derive candidate redirects from shipment records.

	Two old paths are considered per shipment: the path of its
	truesight_dao_shipment_url, and the legacy /shipments/<id> path.

	Args:
		shipments (list): Shipment records from the shipments CSV.

	Returns:
		list: Redirect dicts with keys old, new, type (may contain repeats).
	"""
	redirects = []
	for shipment in shipments:
		shipment_id = str(shipment.get('shipment_contract_number', '') or '').strip().lower()
		if not shipment_id:
			continue
		targets = shipment_targets(shipment)

		old_path = extract_site_path(shipment.get('truesight_dao_shipment_url'))
		if old_path:
			for new_path, redirect_type in targets:
				if old_path == new_path:
					continue
				redirects.append({'old': old_path, 'new': new_path, 'type': redirect_type})

		legacy_path = LEGACY_SHIPMENTS_PREFIX + shipment_id
		for new_path, redirect_type in targets:
			redirects.append({'old': legacy_path, 'new': new_path, 'type': redirect_type})

	return redirects


#============================================
def dedupe_redirects(redirects: list) -> list:
	"""
	Drop repeated (old, new) pairs, keeping the first one.
	"""
	seen = set()
	out = []
	for r in redirects:
		key = (r['old'], r['new'])
		if key in seen:
			continue
		seen.add(key)
		out.append(r)
	return out


#============================================
def group_conflicts(redirects: list) -> dict:
	"""
	Find old paths that map to more than one new path.

	Args:
		redirects (list): Deduplicated redirects.

	Returns:
		dict: old path -> list of competing redirects, in first-seen order.
	"""
	by_old = {}
	for r in redirects:
		by_old.setdefault(r['old'], []).append(r)

	conflicts = {}
	for old_path, group in by_old.items():
		if len(group) > 1:
			conflicts[old_path] = group
	return conflicts


#============================================
def resolve_conflicts(redirects: list) -> tuple:
	"""
	Pick one target per old path and report the targets that lost.

	Agroverse targets win over Sunmint targets. An old path can only
	redirect to one place, so every losing target is returned as an
	unresolved conflict for a person to decide on.

	Args:
		redirects (list): Deduplicated redirects.

	Returns:
		tuple: (final_redirects, conflicts). Conflict dicts have keys
			old, chosen, dropped, dropped_type.
	"""
	conflict_groups = group_conflicts(redirects)

	final = []
	for r in redirects:
		if r['old'] not in conflict_groups:
			final.append(r)

	conflicts = []
	for old_path, group in conflict_groups.items():
		chosen = group[0]
		for r in group:
			if r['type'] == AGROVERSE:
				chosen = r
				break
		final.append(chosen)
		for r in group:
			if r is chosen:
				continue
			conflicts.append({
				'old': old_path,
				'chosen': chosen['new'],
				'dropped': r['new'],
				'dropped_type': r['type'],
			})

	return (final, conflicts)


#============================================
def format_redirect_csv(redirects: list) -> str:
	"""
	Format the old_url,new_url mapping CSV.

	Args:
		redirects (list): Final redirects.

	Returns:
		str: CSV text.
	"""
	# every path is quoted, matching the mapping files kept by hand
	lines = ['old_url,new_url']
	for r in redirects:
		old_value = site_tools.site_files.csv_quote(r['old'], force=True)
		new_value = site_tools.site_files.csv_quote(r['new'], force=True)
		lines.append(old_value + ',' + new_value)
	return '\n'.join(lines) + '\n'


#============================================
def format_conflict_csv(conflicts: list) -> str:
	"""
	Format the unresolved conflicts CSV.

	Args:
		conflicts (list): Conflict dicts from resolve_conflicts().

	Returns:
		str: CSV text.
	"""
	fieldnames = ['old', 'chosen', 'dropped', 'dropped_type']
	lines = ['old_url,chosen_url,dropped_url,dropped_type']
	for c in conflicts:
		values = [site_tools.site_files.csv_quote(c.get(k, '')) for k in fieldnames]
		lines.append(','.join(values))
	return '\n'.join(lines) + '\n'


#============================================
def identify_redirects(
	input_csv: str = None,
	output_csv: str = 'wix_redirects.csv',
	conflicts_csv: str = 'wix_redirect_conflicts.csv',
	dry_run: bool = False,
	verbose: bool = False,
	candidates: list = None,
) -> tuple:
	"""
	Identify redirects from the shipments CSV and write the mapping CSV.

	Args:
		input_csv (str): Shipments CSV; None picks the first existing candidate.
		output_csv (str): Redirect mapping CSV output.
		conflicts_csv (str): Unresolved conflicts CSV output.
		dry_run (bool): If True, do not write files.
		verbose (bool): Print every identified redirect.
		candidates (list): Candidate shipments CSV paths.

	Returns:
		tuple: (final_redirects, conflicts)
	"""
	if input_csv is None:
		if candidates is None:
			candidates = SHIPMENTS_CSV_CANDIDATES
		input_csv = choose_shipments_csv(candidates)
	elif not os.path.isfile(input_csv):
		raise FileNotFoundError(f'Shipments CSV not found: {input_csv}')

	shipments = site_tools.csv_table.read_csv_table(input_csv)
	print(f'Identifying redirects from: {input_csv}')
	print(f'Shipments: {len(shipments)}')

	redirects = dedupe_redirects(derive_shipment_redirects(shipments))
	final, conflicts = resolve_conflicts(redirects)

	if verbose:
		for r in redirects:
			print(f'  {r["old"]} -> {r["new"]} ({r["type"]})')

	for c in conflicts:
		print(f'WARNING: conflict on {c["old"]}: kept {c["chosen"]}, dropped {c["dropped"]} ({c["dropped_type"]})')

	wrote_output = site_tools.site_files.write_text_file_if_changed(
		output_csv, format_redirect_csv(final), dry_run,
	)
	wrote_conflicts = site_tools.site_files.write_text_file_if_changed(
		conflicts_csv, format_conflict_csv(conflicts), dry_run,
	)

	print(f'Potential redirects: {len(redirects)}')
	print(f'Final redirects: {len(final)}')
	print(f'Unresolved conflicts: {len(conflicts)}')
	print(f'Wrote redirects CSV: {wrote_output}')
	print(f'Wrote conflicts CSV: {wrote_conflicts}')

	return (final, conflicts)


#============================================
def main():
	"""
	Main entry point.
	"""
	args = parse_args()
	identify_redirects(
		input_csv=args.input_csv,
		output_csv=args.output_csv,
		conflicts_csv=args.conflicts_csv,
		dry_run=args.dry_run,
		verbose=bool(args.verbose),
	)


if __name__ == '__main__':
	assert extract_site_path('https://truesight.me/shipments/agl13?x=1') == '/shipments/agl13'
	assert extract_site_path('https://example.com/shipments/agl13') == ''
	assert is_true_flag('TRUE')
	assert not is_true_flag('')
	main()
