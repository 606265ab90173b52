"""Test module to run examples from the examples.bcc package

The tests are run using pytest.
"""

import pytest  # pylint: disable=unused-import

from examples.bcc import bezier_polyline_demo


def test_examples_bezier_polyline_demo(capsys):
    """Test function for bezier_polyline_demo example"""
    bezier_polyline_demo.main()
    captured = capsys.readouterr()
    assert "chain_of_7" in captured.out
    assert "general vs cubic evaluator max deviation" in captured.out
