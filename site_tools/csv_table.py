#!/usr/bin/env python3

# Standard Library
import argparse


UNQUOTED_FIELD = 'unquoted-field'
QUOTED_FIELD = 'quoted-field'


#============================================
def clean_cell(text: str) -> str:
	"""
	Clean one raw CSV cell: strip one wrapping pair of double quotes, then trim.

	Only a single layer is removed, so a value that ends in a literal quote
	after unescaping keeps it.

	Args:
		text (str): Raw cell text as produced by split_csv_rows().

	Returns:
		str: Cleaned cell value.
	"""
	text = str(text or '').strip()
	if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
		text = text[1:-1]
	return text.strip()


#============================================
def _is_blank_row(row: list) -> bool:
	for cell in row:
		if clean_cell(cell):
			return False
	return True


#============================================
def _finish_field(field_chars: list, open_idx, close_idx) -> str:
	"""
	Join a field buffer, keeping its edge quotes only when they wrap the field.

	The opening quote is kept only when it starts the field. The pair stays
	only if the field closed and nothing but whitespace follows the close;
	otherwise both edge quotes are dropped like any other toggle quote.
	"""
	if open_idx is not None and close_idx is not None:
		if not ''.join(field_chars[close_idx + 1:]).strip():
			return ''.join(field_chars)
	drop = set([open_idx, close_idx])
	return ''.join(c for idx, c in enumerate(field_chars) if idx not in drop)


#============================================
def split_csv_rows(content: str) -> list:
	"""
	Split delimited text into rows of raw cells.

	Single forward pass with two states (unquoted-field, quoted-field).
	A quote pair wrapping a whole field stays in the raw cell and is removed
	by clean_cell(); toggle quotes anywhere else are dropped. A doubled quote
	inside a quoted field is kept as one literal quote. Blank rows are
	dropped. Unbalanced quotes close at end of input without adding text.

	Args:
		content (str): Whole CSV text (LF, CR or CRLF line endings).

	Returns:
		list: List of rows, each a list of raw cell strings.
	"""
	content = str(content or '')
	rows = []
	row = []
	field_chars = []
	open_idx = None
	close_idx = None
	state = UNQUOTED_FIELD
	i = 0
	length = len(content)

	while i < length:
		char = content[i]
		next_char = content[i + 1] if i + 1 < length else ''

		if char == '"':
			if state == QUOTED_FIELD and next_char == '"':
				field_chars.append('"')
				i += 2
				continue
			if state == QUOTED_FIELD:
				state = UNQUOTED_FIELD
				if open_idx is not None and close_idx is None:
					close_idx = len(field_chars)
					field_chars.append('"')
			else:
				state = QUOTED_FIELD
				if open_idx is None and not ''.join(field_chars).strip():
					open_idx = len(field_chars)
					field_chars.append('"')
			i += 1
			continue

		if state == QUOTED_FIELD:
			field_chars.append(char)
			i += 1
			continue

		if char == ',':
			row.append(_finish_field(field_chars, open_idx, close_idx))
			field_chars = []
			open_idx = None
			close_idx = None
			i += 1
			continue

		if char == '\n' or char == '\r':
			if char == '\r' and next_char == '\n':
				i += 2
			else:
				i += 1
			row.append(_finish_field(field_chars, open_idx, close_idx))
			if not _is_blank_row(row):
				rows.append(row)
			row = []
			field_chars = []
			open_idx = None
			close_idx = None
			continue

		field_chars.append(char)
		i += 1

	# flush the last row when the text has no trailing newline
	if field_chars or row:
		row.append(_finish_field(field_chars, open_idx, close_idx))
		if not _is_blank_row(row):
			rows.append(row)

	return rows


#============================================
def parse_csv_table(content: str) -> list:
	"""
	Parse CSV text into records keyed by the header row.

	Short rows are padded with '' and extra cells are dropped. Text with no
	data row (empty, or header only) gives an empty list.

	Args:
		content (str): Whole CSV text.

	Returns:
		list: List of dict records, keys in header order.
	"""
	rows = split_csv_rows(content)
	if len(rows) < 2:
		return []

	headers = [clean_cell(h) for h in rows[0]]
	records = []
	for row in rows[1:]:
		record = {}
		for idx, header in enumerate(headers):
			value = row[idx] if idx < len(row) else ''
			record[header] = clean_cell(value)
		records.append(record)
	return records


#============================================
def read_csv_table(csv_path: str) -> list:
	"""
	Read a UTF-8 CSV file and parse it with parse_csv_table().

	Args:
		csv_path (str): CSV file path.

	Returns:
		list: List of dict records.
	"""
	# newline='' keeps CR/CRLF inside quoted fields as written
	with open(csv_path, 'r', encoding='utf-8', newline='') as f:
		content = f.read()
	if content.startswith('\ufeff'):
		content = content[1:]
	return parse_csv_table(content)


#============================================
def parse_args():
	"""
	Parse command-line arguments.

	Returns:
		argparse.Namespace: Parsed arguments.
	"""
	parser = argparse.ArgumentParser(description='Print the records of a CSV file')
	parser.add_argument(
		'-i', '--input', dest='input_csv', required=True, type=str,
		help='Input CSV file',
	)
	args = parser.parse_args()
	return args


#============================================
def main():
	"""
	Print each parsed record, one field per line.
	"""
	args = parse_args()
	records = read_csv_table(args.input_csv)
	for idx, record in enumerate(records, start=1):
		print(f'[{idx}/{len(records)}]')
		for key, value in record.items():
			print(f'  {key}: {value}')
	print(f'Records: {len(records)}')


if __name__ == '__main__':
	assert parse_csv_table('') == []
	assert parse_csv_table('header_only_row') == []
	assert parse_csv_table('a,b,c\n1,2') == [{'a': '1', 'b': '2', 'c': ''}]
	assert parse_csv_table('a,"b,c"\n1,"hello ""world"""') == [{'a': '1', 'b,c': 'hello "world"'}]
	assert parse_csv_table('a\nx"y"z') == [{'a': 'xyz'}]
	main()
