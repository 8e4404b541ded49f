# pdf_parser.py

import re
import datetime
import logging
from typing import Iterable, List, Optional
import fitz  # PyMuPDF
from transaction import DEFAULT_CATEGORY, Transaction

logger = logging.getLogger(__name__)


class PDFParser:
    DATE_PATTERN = re.compile(r"^(\d{1,2}[/-]\d{1,2})")
    MONTH_PATTERN = re.compile(r"^(\d{1,2})\s+([A-Za-zÁÉÍÓÚáéíóúÜü\.]+)")
    AMOUNT_PATTERN = re.compile(r"\d[\d\.]*,\d{2}-?")
    INSTALL_PATTERN = re.compile(r"C\.?\s*(\d{1,2})/(\d{1,2})", re.IGNORECASE)
    MONTH_NAMES = {
        'ene':1,'feb':2,'mar':3,'abr':4,'may':5,'jun':6,
        'jul':7,'ago':8,'sep':9,'oct':10,'nov':11,'dic':12
    }

    def __init__(self, category: str = DEFAULT_CATEGORY) -> None:
        self.category = category

    def parse_pdf(self, pdf_path: str, year: Optional[int] = None) -> List[Transaction]:
        lines: List[str] = []
        with fitz.open(pdf_path) as doc:
            for page in doc:
                lines.extend(page.get_text("text").split("\n"))
        transactions = self.parse_lines(lines, year)
        logger.info("Parsed %d transactions from %s", len(transactions), pdf_path)
        return transactions

    def parse_lines(self, lines: Iterable[str], year: Optional[int] = None) -> List[Transaction]:
        year = year or datetime.date.today().year
        transactions: List[Transaction] = []
        for line in lines:
            t = self._parse_line(line.strip(), year)
            if t is not None:
                transactions.append(t)
        return transactions

    def _parse_date(self, line: str, year: int):
        m = self.DATE_PATTERN.match(line)
        if m:
            d, mn = map(int, m.group(1).replace('-', '/').split('/'))
            return datetime.date(year, mn, d), line[m.end():].strip()

        m = self.MONTH_PATTERN.match(line)
        if m:
            mn = self.MONTH_NAMES.get(m.group(2).lower()[:3])
            if mn:
                return datetime.date(year, mn, int(m.group(1))), line[m.end():].strip()
        return None, None

    def _parse_line(self, line: str, year: int) -> Optional[Transaction]:
        if not line:
            return None
        try:
            date, rest = self._parse_date(line, year)
        except ValueError:
            logger.debug("Invalid date, skipping line: %s", line)
            return None
        if date is None or not rest:
            return None

        amt_m = None
        for am in self.AMOUNT_PATTERN.finditer(rest):
            amt_m = am
        if not amt_m:
            return None

        amt_str = amt_m.group(0)
        neg = '-' in amt_str or (amt_m.start() > 0 and rest[amt_m.start()-1] == '-')
        amt = float(amt_str.rstrip('-').replace('.', '').replace(',', '.'))
        if neg or amt == 0:
            logger.debug("Skipping credit or zero amount: %s", line)
            return None

        desc = rest[:amt_m.start()].strip().rstrip('-').strip()
        im = self.INSTALL_PATTERN.search(desc)
        if im:
            desc = desc[:im.start()].strip()
        if '*' in desc:
            desc = desc.split('*', 1)[1].strip()

        return Transaction(amount=amt, category=self.category, store_name=desc or line, date=date)
