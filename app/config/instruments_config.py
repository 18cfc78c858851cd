"""
Seed data for the instruments reference table.
Member and profile records store the abbreviation; the dashboard resolves it
back to the display name.
"""

INSTRUMENTS = [
    {"name": "바이올린", "english": "Violin", "abbreviation": "Vn"},
    {"name": "비올라", "english": "Viola", "abbreviation": "Va"},
    {"name": "첼로", "english": "Cello", "abbreviation": "Vc"},
    {"name": "콘트라베이스", "english": "Double Bass", "abbreviation": "Cb"},
    {"name": "플루트", "english": "Flute", "abbreviation": "Fl"},
    {"name": "오보에", "english": "Oboe", "abbreviation": "Ob"},
    {"name": "클라리넷", "english": "Clarinet", "abbreviation": "Cl"},
    {"name": "바순", "english": "Bassoon", "abbreviation": "Bn"},
    {"name": "호른", "english": "Horn", "abbreviation": "Hn"},
    {"name": "트럼펫", "english": "Trumpet", "abbreviation": "Tp"},
    {"name": "트롬본", "english": "Trombone", "abbreviation": "Tb"},
    {"name": "튜바", "english": "Tuba", "abbreviation": "Tu"},
    {"name": "팀파니", "english": "Timpani", "abbreviation": "Timp"},
    {"name": "타악기", "english": "Percussion", "abbreviation": "Perc"},
    {"name": "하프", "english": "Harp", "abbreviation": "Hp"},
    {"name": "피아노", "english": "Piano", "abbreviation": "Pf"},
]
