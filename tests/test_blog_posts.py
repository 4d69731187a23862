# Standard Library
import os
import json

# PIP3 modules
import yaml

# local repo modules
import site_tools.blog_posts
from site_tools.blog_posts import (
	slugify,
	format_publish_date,
	sort_posts_newest_first,
	extract_main_content,
	post_neighbors,
	post_url,
)


#============================================
def test_slugify():
	assert slugify('  Hello, World! ') == 'hello-world'
	assert slugify('Cacao  Trees__and--Shade') == 'cacao-trees-and-shade'
	assert slugify('-Edge-') == 'edge'


#============================================
def test_format_publish_date():
	assert format_publish_date('2024-01-05') == 'January 5, 2024'
	assert format_publish_date('2023-11-20T08:30:00.000Z') == 'November 20, 2023'
	assert format_publish_date('') == ''
	assert format_publish_date('someday') == 'someday'


#============================================
def test_sort_posts_newest_first():
	posts = [
		{'title': 'old', 'publishDate': '2023-01-01'},
		{'title': 'undated'},
		{'title': 'new', 'publishDate': '2024-05-01T00:00:00Z'},
	]
	titles = [p['title'] for p in sort_posts_newest_first(posts)]
	assert titles == ['new', 'old', 'undated']


#============================================
def test_extract_main_content():
	page = '<html><main><article class="x"> <p>Body</p> </article></main></html>'
	assert extract_main_content(page) == '<p>Body</p>'
	page = '<div data-testid="richTextElement"><p>Rich</p></div>'
	assert extract_main_content(page) == '<p>Rich</p>'
	page = '<DIV class="blog-post-content">Text</DIV>'
	assert extract_main_content(page) == 'Text'
	assert extract_main_content('<p>bare</p>') == '<p>bare</p>'


#============================================
def test_post_neighbors():
	posts = [{'slug': 'a'}, {'slug': 'b'}, {'slug': 'c'}]
	assert post_neighbors(posts, 0) == (None, posts[1])
	assert post_neighbors(posts, 1) == (posts[0], posts[2])
	assert post_neighbors(posts, 2) == (posts[1], None)


#============================================
def test_post_url():
	assert post_url({'url': 'https://truesight.me/post/x'}) == 'https://truesight.me/post/x'
	assert post_url({'title': 'My Post'}) == 'https://truesight.me/blog/my-post'


#============================================
def _write_site(tmp_path):
	data_dir = os.path.join(str(tmp_path), 'data')
	snapshot_dir = os.path.join(str(tmp_path), 'snapshots')
	os.makedirs(data_dir)
	os.makedirs(snapshot_dir)

	posts = {'posts': [
		{'title': 'First Post', 'publishDate': '2023-02-01', 'tags': ['cacao', 'trees']},
		{'title': 'Second Post', 'slug': 'second', 'publishDate': '2024-03-04', 'author': 'Gary'},
		{'title': 'No Snapshot', 'publishDate': '2024-01-01'},
	]}
	input_json = os.path.join(data_dir, 'blog-posts.json')
	with open(input_json, 'w', encoding='utf-8') as f:
		json.dump(posts, f)

	with open(os.path.join(snapshot_dir, 'first-post.html'), 'w', encoding='utf-8') as f:
		f.write('<nav>menu</nav><article><p>One</p></article>')
	with open(os.path.join(snapshot_dir, 'second.html'), 'w', encoding='utf-8') as f:
		f.write('<main><p>Two</p></main>')

	return (input_json, snapshot_dir, os.path.join(data_dir, 'blog_posts.yml'))


#============================================
def test_build_blog_index(tmp_path):
	input_json, snapshot_dir, output_yaml = _write_site(tmp_path)
	entries = site_tools.blog_posts.build_blog_index(
		input_json=input_json,
		snapshot_dir=snapshot_dir,
		output_yaml=output_yaml,
	)
	assert [e['slug'] for e in entries] == ['second', 'first-post']

	second, first = entries
	assert second['author'] == 'Gary'
	assert second['publish_date'] == 'March 4, 2024'
	assert second['content'] == '<p>Two</p>'
	assert second['previous'] == ''
	assert second['next'] == 'first-post'
	assert first['author'] == 'TrueSight DAO'
	assert first['tags'] == 'cacao, trees'
	assert first['url'] == 'https://truesight.me/blog/first-post'
	assert first['previous'] == 'second'
	assert first['next'] == ''

	with open(output_yaml, 'r', encoding='utf-8') as f:
		data = yaml.safe_load(f)
	assert data == {'posts': entries}


#============================================
def test_build_blog_index_dry_run(tmp_path):
	input_json, snapshot_dir, output_yaml = _write_site(tmp_path)
	site_tools.blog_posts.build_blog_index(
		input_json=input_json,
		snapshot_dir=snapshot_dir,
		output_yaml=output_yaml,
		dry_run=True,
	)
	assert not os.path.exists(output_yaml)


#============================================
def test_parse_args_write_flag(monkeypatch):
	monkeypatch.setattr('sys.argv', ['blog_posts.py', '-n'])
	assert site_tools.blog_posts.parse_args().dry_run
	monkeypatch.setattr('sys.argv', ['blog_posts.py', '-n', '-w'])
	assert not site_tools.blog_posts.parse_args().dry_run
