"""Builders for upstream payload objects used across the test suite."""


def make_bill(number, title, **extra):
    """Congress.gov list-endpoint bill object."""
    bill = {
        "congress": 118,
        "type": "HR",
        "number": str(number),
        "title": title,
        "url": f"https://api.congress.gov/v3/bill/118/hr/{number}",
    }
    bill.update(extra)
    return bill


def make_document(number, title, **extra):
    """Federal Register list-endpoint document object."""
    doc = {
        "document_number": number,
        "title": title,
        "publication_date": "2024-03-01",
        "type": "Rule",
        "html_url": f"https://www.federalregister.gov/d/{number}",
    }
    doc.update(extra)
    return doc


def make_section(title, section, heading, **extra):
    """US Code search result object."""
    result = {
        "title": title,
        "section": section,
        "heading": heading,
        "url": f"https://uscode.house.gov/view.xhtml?req={title}+USC+{section}",
    }
    result.update(extra)
    return result


def make_comment(comment_id, **attributes):
    """Regulations.gov JSON:API comment resource."""
    return {"id": comment_id, "type": "comments", "attributes": attributes}


def make_opinion(opinion_id, case_name, /, **extra):
    """CourtListener search result (camelCase)."""
    opinion = {"id": opinion_id, "caseName": case_name}
    opinion.update(extra)
    return opinion


def make_opinion_resource(opinion_id, cluster_id, **extra):
    """CourtListener /opinions/{id}/ resource: text and links, no case name."""
    opinion = {
        "id": opinion_id,
        "absolute_url": f"/opinion/{cluster_id}/roe-v-wade/",
        "cluster": f"https://www.courtlistener.com/api/rest/v3/clusters/{cluster_id}/",
        "author_str": "",
        "type": "010combined",
        "download_url": None,
        "plain_text": "",
        "html_with_citations": "<p>MR. JUSTICE BLACKMUN delivered the opinion of the Court.</p>",
    }
    opinion.update(extra)
    return opinion


def make_cluster(cluster_id, case_name, **extra):
    """CourtListener /clusters/{id}/ resource."""
    cluster = {
        "id": cluster_id,
        "absolute_url": f"/opinion/{cluster_id}/roe-v-wade/",
        "case_name": case_name,
        "case_name_full": "",
        "date_filed": "1973-01-22",
        "judges": "Blackmun, Burger, Douglas",
        "precedential_status": "Published",
        "citation_count": 5000,
        "slug": "roe-v-wade",
        "docket": "https://www.courtlistener.com/api/rest/v3/dockets/108713/",
    }
    cluster.update(extra)
    return cluster
