from bson import ObjectId


def _campaign(db, status="Active", donated=0):
    return db["donationCampaigns"].insert_one(
        {
            "petName": "Buddy",
            "petImage": "buddy.png",
            "maxAmount": 500,
            "donatedAmount": donated,
            "status": status,
            "askerInfo": {"email": "seeker@example.com"},
        }
    ).inserted_id


def _donation(campaign_id, amount=25, email="donor@example.com"):
    return {
        "campaignId": str(campaign_id),
        "donationAmount": amount,
        "donator": {"email": email, "name": "Donor"},
        "petName": "Buddy",
        "petImage": "buddy.png",
    }


def test_donation_to_active_campaign(client, db, login):
    campaign_id = _campaign(db, donated=100)
    login("donor@example.com")
    resp = client.post("/donations", json=_donation(campaign_id, amount=40))
    assert resp.status_code == 200

    donations = list(db["donations"].find())
    assert len(donations) == 1
    assert donations[0]["donationAmount"] == 40
    assert donations[0]["campaignId"] == str(campaign_id)
    assert donations[0]["donator"]["email"] == "donor@example.com"
    assert db["donationCampaigns"].find_one({"_id": campaign_id})["donatedAmount"] == 100


def test_donation_to_paused_campaign_rejected(client, db, login):
    login("donor@example.com")
    for status in ("Paused", "Pause"):
        campaign_id = _campaign(db, status=status)
        resp = client.post("/donations", json=_donation(campaign_id))
        assert resp.status_code == 400
        assert resp.json()["detail"] == "This campaign is paused"
    assert db["donations"].count_documents({}) == 0


def test_donation_to_missing_campaign(client, db, login):
    login()
    resp = client.post("/donations", json=_donation(ObjectId()))
    assert resp.status_code == 404
    assert db["donations"].count_documents({}) == 0


def test_donation_rejects_zero_amount(client, db, login):
    campaign_id = _campaign(db)
    login()
    resp = client.post("/donations", json=_donation(campaign_id, amount=0))
    assert resp.status_code == 422


def test_donator_list_and_my_donations(client, db, login):
    campaign_id = _campaign(db)
    other_id = _campaign(db)
    login("donor@example.com")
    client.post("/donations", json=_donation(campaign_id))
    client.post("/donations", json=_donation(other_id))
    client.post("/donations", json=_donation(campaign_id, email="friend@example.com"))

    assert len(client.get(f"/donator-list/{campaign_id}").json()) == 2
    mine = client.get("/my-donations/donor@example.com").json()
    assert len(mine) == 2
    assert {d["campaignId"] for d in mine} == {str(campaign_id), str(other_id)}


def test_refund_leaves_total_alone(client, db, login):
    campaign_id = _campaign(db, donated=25)
    login()
    donation_id = client.post("/donations", json=_donation(campaign_id)).json()["insertedId"]

    resp = client.delete(f"/refund-donation/{donation_id}")
    assert resp.json()["deletedCount"] == 1
    assert db["donations"].count_documents({}) == 0
    assert db["donationCampaigns"].find_one({"_id": campaign_id})["donatedAmount"] == 25


def test_donation_rejects_infinite_amount(client, db, login):
    campaign_id = _campaign(db)
    login("donor@example.com")
    body = (
        f'{{"campaignId": "{campaign_id}", "donationAmount": Infinity,'
        ' "donator": {"email": "donor@example.com"}}'
    )
    resp = client.post(
        "/donations", content=body, headers={"content-type": "application/json"}
    )
    assert resp.status_code == 422
    assert db["donations"].count_documents({}) == 0
    assert client.get("/overview-stats/donor@example.com").json()["totalDonations"] == 0


def test_lowercase_paused_campaign_rejects_donation(client, db, login):
    login("donor@example.com")
    for status in ("paused", "PAUSED", " pause "):
        campaign_id = _campaign(db, status=status)
        resp = client.post("/donations", json=_donation(campaign_id))
        assert resp.status_code == 400
    assert db["donations"].count_documents({}) == 0
