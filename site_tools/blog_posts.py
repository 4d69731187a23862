#!/usr/bin/env python3

# Standard Library
import os
import re
import json
import argparse
import datetime

# local repo modules
import site_tools.site_files


BLOG_BASE_URL = 'https://truesight.me/blog/'
DEFAULT_AUTHOR = 'TrueSight DAO'
SNAPSHOT_DIR_DEFAULT = os.path.join('snapshots', 'blog')

# first match wins
CONTENT_PATTERNS = [
	r'<article[^>]*>([\s\S]*?)</article>',
	r'<div[^>]*class="[^"]*blog[^"]*post[^"]*content[^"]*"[^>]*>([\s\S]*?)</div>',
	r'<div[^>]*data-testid="richTextElement"[^>]*>([\s\S]*?)</div>',
	r'<main[^>]*>([\s\S]*?)</main>',
]


#============================================
def parse_args():
	"""
	Parse command-line arguments.

	Returns:
		argparse.Namespace: Parsed arguments.
	"""
	parser = argparse.ArgumentParser(
		description='Build data/blog_posts.yml from data/blog-posts.json and saved blog page snapshots',
	)

	parser.add_argument(
		'-i', '--input', dest='input_json', required=False, type=str,
		default=os.path.join('data', 'blog-posts.json'),
		help='Blog posts JSON (default: data/blog-posts.json)',
	)
	parser.add_argument(
		'-s', '--snapshot-dir', dest='snapshot_dir', required=False, type=str,
		default=SNAPSHOT_DIR_DEFAULT,
		help='Directory of saved <slug>.html pages (default: snapshots/blog)',
	)
	parser.add_argument(
		'-o', '--output', dest='output_yaml', required=False, type=str,
		default=os.path.join('data', 'blog_posts.yml'),
		help='Blog index YAML output (default: data/blog_posts.yml)',
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
		help='Print per-post progress',
	)

	args = parser.parse_args()
	return args


#============================================
def slugify(text: str) -> str:
	"""
	Make a URL slug from a post title.

	Args:
		text (str): Title.

	Returns:
		str: Slug like 'my-first-post'.
	"""
	text = str(text or '').lower().strip()
	text = re.sub(r'[^\w\s-]', '', text, flags=re.ASCII)
	text = re.sub(r'[\s_-]+', '-', text)
	text = text.strip('-')
	return text


#============================================
def parse_publish_date(date_text: str):
	"""
	Parse the date part of an ISO date or datetime string.

	Returns:
		datetime.date or None.
	"""
	match = re.match(r'^\s*(\d{4}-\d{2}-\d{2})', str(date_text or ''))
	if not match:
		return None
	try:
		return datetime.date.fromisoformat(match.group(1))
	except ValueError:
		return None


#============================================
def format_publish_date(date_text: str) -> str:
	"""
	Format a publish date like 'January 5, 2024'.

	Args:
		date_text (str): ISO date or datetime string.

	Returns:
		str: Formatted date, '' when empty, or the input when unparseable.
	"""
	date_text = str(date_text or '').strip()
	if not date_text:
		return ''
	date_value = parse_publish_date(date_text)
	if date_value is None:
		return date_text
	return date_value.strftime('%B ') + str(date_value.day) + ', ' + str(date_value.year)


#============================================
def sort_posts_newest_first(posts: list) -> list:
	"""
	Sort posts by publishDate, newest first; undated posts go last.
	"""
	def sort_key(post: dict):
		date_value = parse_publish_date(post.get('publishDate'))
		if date_value is None:
			return datetime.date.min
		return date_value

	return sorted(posts, key=sort_key, reverse=True)


#============================================
def post_slug(post: dict) -> str:
	return str(post.get('slug') or '').strip() or slugify(post.get('title'))


#============================================
def post_url(post: dict) -> str:
	"""
	Get the live URL of a post, falling back to the blog URL pattern.
	"""
	url = str(post.get('url') or '').strip()
	if url:
		return url
	return BLOG_BASE_URL + post_slug(post)


#============================================
def format_tags(tags) -> str:
	if not tags:
		return ''
	if isinstance(tags, list):
		return ', '.join(str(t) for t in tags)
	return str(tags)


#============================================
def extract_main_content(html_text: str) -> str:
	"""
	Extract the main post body from a rendered blog page.

	Args:
		html_text (str): Full page HTML.

	Returns:
		str: Inner HTML of the content area, or the whole text as fallback.
	"""
	html_text = str(html_text or '')
	for pattern in CONTENT_PATTERNS:
		match = re.search(pattern, html_text, flags=re.IGNORECASE)
		if match:
			return match.group(1).strip()
	return html_text


#============================================
def post_neighbors(posts: list, index: int) -> tuple:
	"""
	Get the previous and next post around a list position.

	Returns:
		tuple: (previous_post or None, next_post or None)
	"""
	prev_post = posts[index - 1] if index > 0 else None
	next_post = posts[index + 1] if index < len(posts) - 1 else None
	return (prev_post, next_post)


#============================================
def read_posts_json(json_path: str) -> list:
	"""
	Read the post list from a {"posts": [...]} JSON file.

	Args:
		json_path (str): JSON file path.

	Returns:
		list: List of post dicts.
	"""
	with open(json_path, 'r', encoding='utf-8') as f:
		data = json.load(f)

	if isinstance(data, dict):
		posts = data.get('posts', [])
	else:
		posts = data
	if not isinstance(posts, list):
		raise ValueError(f'Expected a list of posts in {json_path}')
	return [p for p in posts if isinstance(p, dict)]


#============================================
def read_snapshot_content(snapshot_dir: str, slug: str) -> str:
	"""
	Read and extract post content from a saved page, '' when none is saved.
	"""
	path = os.path.join(snapshot_dir, slug + '.html')
	if not os.path.isfile(path):
		return ''
	with open(path, 'r', encoding='utf-8', errors='ignore') as f:
		return extract_main_content(f.read())


#============================================
def build_blog_index(
	input_json: str = os.path.join('data', 'blog-posts.json'),
	snapshot_dir: str = SNAPSHOT_DIR_DEFAULT,
	output_yaml: str = os.path.join('data', 'blog_posts.yml'),
	dry_run: bool = False,
	verbose: bool = False,
) -> list:
	"""
	Build the blog index YAML from the post list and saved page snapshots.

	Posts without saved content are left out so that previous/next links
	only point at pages that exist.

	Args:
		input_json (str): Blog posts JSON.
		snapshot_dir (str): Directory of saved <slug>.html pages.
		output_yaml (str): Blog index YAML output.
		dry_run (bool): If True, do not write files.
		verbose (bool): Print per-post progress.

	Returns:
		list: Post entries written to the index.
	"""
	if not os.path.isfile(input_json):
		raise FileNotFoundError(f'Blog posts JSON not found: {input_json}')

	posts = sort_posts_newest_first(read_posts_json(input_json))
	print(f'Blog posts: {len(posts)}')

	entries = []
	missing = 0
	total = len(posts)
	for idx, post in enumerate(posts, start=1):
		slug = post_slug(post)
		title = str(post.get('title') or '').strip() or 'Untitled'
		content = read_snapshot_content(snapshot_dir, slug) if slug else ''

		if verbose:
			print(f'[{idx}/{total}] {title}')
			print(f'  url: {post_url(post)}')
			print(f'  content: {len(content)} chars')

		if not content:
			missing += 1
			print(f'WARNING: no saved content for {slug or title}')
			continue

		entries.append({
			'title': title,
			'slug': slug,
			'url': post_url(post),
			'publish_date': format_publish_date(post.get('publishDate')),
			'author': str(post.get('author') or '').strip() or DEFAULT_AUTHOR,
			'tags': format_tags(post.get('tags')),
			'cover_image': str(post.get('coverImage') or '').strip(),
			'content': content,
		})

	for index, entry in enumerate(entries):
		prev_post, next_post = post_neighbors(entries, index)
		entry['previous'] = prev_post['slug'] if prev_post else ''
		entry['next'] = next_post['slug'] if next_post else ''

	content_out = '# Generated from ' + os.path.basename(input_json) + '. Edit that file instead.\n'
	content_out += site_tools.site_files.yaml_dump({'posts': entries})
	wrote_yaml = site_tools.site_files.write_text_file_if_changed(output_yaml, content_out, dry_run)

	print(f'Indexed: {len(entries)}')
	print(f'Missing content: {missing}')
	print(f'Wrote YAML: {wrote_yaml}')

	return entries


#============================================
def main():
	"""
	Main entry point.
	"""
	args = parse_args()
	build_blog_index(
		input_json=args.input_json,
		snapshot_dir=args.snapshot_dir,
		output_yaml=args.output_yaml,
		dry_run=args.dry_run,
		verbose=bool(args.verbose),
	)


if __name__ == '__main__':
	assert slugify('  Hello, World! ') == 'hello-world'
	assert format_publish_date('2024-01-05T10:00:00Z') == 'January 5, 2024'
	assert extract_main_content('<main><p>x</p></main>') == '<p>x</p>'
	main()
