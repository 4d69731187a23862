#!/usr/bin/env python3

# Standard Library
import os
import sys
import argparse


#============================================
def parse_args():
	"""
	Parse command-line arguments.

	Returns:
		argparse.Namespace: Parsed arguments.
	"""
	parser = argparse.ArgumentParser(description="Identify shipment redirects and build data/redirects.yml")

	parser.add_argument(
		'-i', '--input', dest='input_csv', required=False, type=str,
		default=None,
		help='Shipments CSV (default: first existing file under assets/raw/)',
	)
	parser.add_argument(
		'-r', '--redirects-csv', dest='redirects_csv', required=False, type=str,
		default='wix_redirects.csv',
		help='Redirect mapping CSV (default: wix_redirects.csv)',
	)
	parser.add_argument(
		'-o', '--output', dest='output_yaml', required=False, type=str,
		default=os.path.join('data', 'redirects.yml'),
		help='Redirect map YAML output (default: data/redirects.yml)',
	)
	parser.add_argument(
		'-s', '--skip-identify', dest='skip_identify', action='store_true',
		help='Use the existing redirect mapping CSV as-is',
	)

	parser.add_argument(
		'-n', '--dry-run', dest='dry_run', help='Do not write files', action='store_true'
	)
	parser.add_argument(
		'-w', '--write', dest='dry_run', help='Write files (default)', action='store_false'
	)
	parser.set_defaults(dry_run=False)
	parser.add_argument(
		'-v', '--verbose', dest='verbose', action='store_true',
		help='Print every redirect',
	)

	args = parser.parse_args()
	return args


#============================================
def main():
	"""
	Run redirect identification, then build the redirect map from its output.
	"""
	args = parse_args()

	repo_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)

	import site_tools.redirect_rules
	import site_tools.redirect_map

	if not args.skip_identify:
		conflicts_csv = os.path.join(os.path.dirname(args.redirects_csv), 'wix_redirect_conflicts.csv')
		site_tools.redirect_rules.identify_redirects(
			input_csv=args.input_csv,
			output_csv=args.redirects_csv,
			conflicts_csv=conflicts_csv,
			dry_run=args.dry_run,
			verbose=args.verbose,
		)

	site_tools.redirect_map.build_redirect_map(
		input_csv=args.redirects_csv,
		output_yaml=args.output_yaml,
		dry_run=args.dry_run,
		verbose=args.verbose,
	)


if __name__ == '__main__':
	main()
