# Standard Library
import os

# PIP3 modules
import yaml

# local repo modules
import site_tools.build_redirects


SHIPMENTS_CSV = (
	'shipment_contract_number,is_cacao_shipment,serialized,truesight_dao_shipment_url\n'
	'AGL13,TRUE,FALSE,https://truesight.me/shipments/agl13\n'
	'AGL4,TRUE,TRUE,\n'
)


#============================================
def _read_yaml(path: str) -> dict:
	with open(path, 'r', encoding='utf-8') as f:
		return yaml.safe_load(f)


#============================================
def test_conflicts_csv_lands_next_to_redirects_csv(tmp_path, monkeypatch):
	input_csv = os.path.join(str(tmp_path), 'shipments.csv')
	redirects_csv = os.path.join(str(tmp_path), 'out', 'wix_redirects.csv')
	output_yaml = os.path.join(str(tmp_path), 'data', 'redirects.yml')
	with open(input_csv, 'w', encoding='utf-8') as f:
		f.write(SHIPMENTS_CSV)

	monkeypatch.setattr('sys.argv', [
		'build_redirects.py', '-i', input_csv, '-r', redirects_csv, '-o', output_yaml,
	])
	site_tools.build_redirects.main()

	assert os.path.isfile(redirects_csv)
	assert os.path.isfile(os.path.join(str(tmp_path), 'out', 'wix_redirect_conflicts.csv'))
	data = _read_yaml(output_yaml)
	assert [m['from'] for m in data['redirects']] == ['/shipments/agl13', '/shipments/agl4']


#============================================
def test_skip_identify_uses_existing_csv(tmp_path, monkeypatch):
	redirects_csv = os.path.join(str(tmp_path), 'wix_redirects.csv')
	output_yaml = os.path.join(str(tmp_path), 'data', 'redirects.yml')
	with open(redirects_csv, 'w', encoding='utf-8') as f:
		f.write('old_url,new_url\n/hand/edited,/new/page\n')

	monkeypatch.setattr('sys.argv', [
		'build_redirects.py', '-s',
		'-i', os.path.join(str(tmp_path), 'missing.csv'),
		'-r', redirects_csv, '-o', output_yaml,
	])
	site_tools.build_redirects.main()

	assert not os.path.exists(os.path.join(str(tmp_path), 'wix_redirect_conflicts.csv'))
	with open(redirects_csv, 'r', encoding='utf-8') as f:
		assert f.read() == 'old_url,new_url\n/hand/edited,/new/page\n'
	data = _read_yaml(output_yaml)
	assert data['redirects'] == [
		{'from': '/hand/edited', 'to': '/new/page', 'page': 'redirects/hand/edited/index.html'},
	]
