"""Report builder — text and JSON output for margin-tool results."""

import json
import os
from typing import Any

from margin_tool.core.types import Report


def _fmt_num(v: Any) -> str:
    if isinstance(v, float) and v.is_integer():
        return str(int(v))
    if isinstance(v, float):
        return f'{v:g}'
    return str(v)


def _fmt_rect(r: list[float] | None) -> str:
    if not r:
        return ''
    x, y, w, h = (_fmt_num(v) for v in r)
    return f'[{x},{y} {w}×{h}]'


def _fmt_component(c: Any) -> str:
    if isinstance(c, list):
        px, pct = c
        if not pct:
            return f'{_fmt_num(px)}px'
        text = f'{_fmt_num(round(pct * 100, 6))}%'
        if px:
            text += f'{px:+g}px'
        return text
    return str(c)


def format_text(report: Report) -> str:
    """Format report as human-readable text."""
    lines = []
    header = f'margin-tool: {" ".join(str(m) for m in report.margin) or "(none)"}'
    if report.image_path:
        dim = f'{report.image_width}×{report.image_height}'
        header += f' — {os.path.basename(report.image_path)} ({dim})'
    lines.append(header)
    lines.append('')

    for zone_name, zone_data in report.zones.items():
        lines.append(f'── {zone_name} {_fmt_rect(zone_data.get("rect"))}'.rstrip())

        techniques = zone_data.get('techniques', {})
        for tech_name, tech_data in techniques.items():
            if tech_name == 'parse' and 'spec' in tech_data:
                sides = zip(('top', 'right', 'bottom', 'left'), tech_data['spec'])
                lines.append('  spec: ' + '  '.join(f'{s}={_fmt_component(c)}' for s, c in sides))
            elif tech_name == 'apply' and 'inner' in tech_data:
                lines.append(f'  inset: {_fmt_rect(tech_data["inner"])}')
            elif tech_name == 'crop' and 'file' in tech_data:
                lines.append(f'  crop: {tech_data["file"]} ({tech_data["width"]}×{tech_data["height"]})')
            elif tech_name == 'bands' and 'bands' in tech_data:
                for side, band in tech_data['bands'].items():
                    mark = '✓' if band['blank'] else '✗'
                    lines.append(f'  {side}: {band["pixels"]}px  std={band["std"]}  {mark}')
            else:
                for k, v in tech_data.items():
                    lines.append(f'  {tech_name}.{k}: {v}')

        lines.append('')

    total = report.pass_count + report.fail_count
    if total > 0:
        lines.append(f'PASS {report.pass_count}/{total} bands  FAIL {report.fail_count}/{total} bands')
    return '\n'.join(lines)


def format_json(report: Report) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {'margin': report.margin}
    if report.image_path:
        obj['image'] = report.image_path
        obj['dimensions'] = {'width': report.image_width, 'height': report.image_height}

    obj['zones'] = []
    for zone_name, zone_data in report.zones.items():
        obj['zones'].append(
            {
                'name': zone_name,
                'rect': zone_data.get('rect'),
                'techniques': zone_data.get('techniques', {}),
            }
        )

    obj['summary'] = {
        'total': report.pass_count + report.fail_count,
        'pass': report.pass_count,
        'fail': report.fail_count,
    }
    return json.dumps(obj, indent=2)
