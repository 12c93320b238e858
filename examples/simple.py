import sys

from tabmarkup import build_diagram, render_html, to_chordpro
from tabmarkup.song import SongDetail

tab = """[Verse]
[tab]   [ch]Am[/ch]        [ch]C/G[/ch]
Hello  world, hello again[/tab]
"""

sys.stdout.write(render_html(tab) + "\n")

song = SongDetail(song_name="Hello", artist_name="Nobody", tab=tab, capo=2)
sys.stdout.write(to_chordpro(song))
# {title: Hello}
# {artist: Nobody}
# {capo: 2}
# {comment: Verse}
# Hel[Am]lo  world,[C/G] hello again

sys.stdout.write(build_diagram([-1, 0, 2, 2, 1, 0], [0, 0, 2, 3, 1, 0]).to_text() + "\n")
