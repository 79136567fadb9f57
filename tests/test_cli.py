import json
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent


def test_main_json_output(tmp_path):
    p = tmp_path / 'headers.txt'
    p.write_text(
        'Received: from b.example by c.example; Tue, 10 May 2005 17:27:00 +0000\n'
        'Received: from a.example by b.example; Tue, 10 May 2005 17:26:50 +0000 (GMT)\n'
        'Subject: hi\n'
        '\n'
    )

    res = subprocess.run([sys.executable, str(ROOT / 'main.py'), str(p), '--json'],
                         capture_output=True, cwd=str(ROOT))
    assert res.returncode == 0
    out = json.loads(res.stdout.decode('utf-8'))
    assert [h['info'] for h in out['hops']] == ['from a.example by b.example', 'from b.example by c.example']
    assert out['total_seconds'] == 10.0


def test_main_pretty_output(tmp_path):
    p = tmp_path / 'headers2.txt'
    p.write_text('Received: by 2002:a05:7000::1 with SMTP; Wed, 13 Mar 2019 14:50:05 -0700\n\n')

    res = subprocess.run([sys.executable, str(ROOT / 'main.py'), str(p)], capture_output=True, cwd=str(ROOT))
    assert res.returncode == 0
    out = res.stdout.decode('utf-8')
    assert 'Relay Path' in out
    assert 'Wed, 13 Mar 2019 00:00:00 +0000' in out


def test_main_missing_file(tmp_path):
    res = subprocess.run([sys.executable, str(ROOT / 'main.py'), str(tmp_path / 'nope.txt')],
                         capture_output=True, cwd=str(ROOT))
    assert res.returncode == 1
    assert 'not found' in res.stdout.decode('utf-8')
