"""Streamlit UI for TrustPulse."""

import logging
import sys
from pathlib import Path

import streamlit as st

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent.parent))

from trustpulse.app import TrustPulseApp
from trustpulse.core.config import settings
from trustpulse.core.constants import DisplayConstants, PromptConstants, ViewConstants
from trustpulse.core.forms import CREATOR_PLATFORMS, FormValidationError, make_user
from trustpulse.core.shaping import label_price_points, pulse_pillars
from trustpulse.services.chat import PulseChat
from trustpulse.services.directory import card_prompt, generate_business_asset
from trustpulse.services.influencers import COLLAB_TARGETS, find_collab_matches, search_influencers
from trustpulse.services.tryon import TRY_ON_MODES, encode_capture, estimate_measurement, virtual_try_on

logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
logger = logging.getLogger(__name__)

st.set_page_config(
    page_title="TrustPulse - Verified Product Pulse",
    page_icon="💠",
    layout="wide"
)

if "app" not in st.session_state:
    st.session_state.app = TrustPulseApp()
if "chat" not in st.session_state:
    st.session_state.chat = PulseChat(st.session_state.app.llm)

app: TrustPulseApp = st.session_state.app


def _stars(score):
    full = int(round(score or 0))
    return "★" * full + "☆" * (5 - full)


def _render_review(review):
    badges = []
    if review.is_verified:
        badges.append("verified")
    if review.is_buyer:
        badges.append("buyer")
    if review.is_collaboration:
        badges.append("collab")
    tag = f" _({', '.join(badges)})_" if badges else ""
    st.markdown(f"**{review.user}** · {review.source.value} · {review.date} {_stars(review.score)}{tag}")
    st.write(review.text)
    if review.source_url:
        st.caption(review.source_url)


def _render_product(insight):
    left, right = st.columns([2, 1])
    with left:
        st.header(insight.name)
        st.caption(insight.category)
        st.write(insight.description)
    with right:
        st.metric("Pulse Score", f"{insight.brand_score:.0f}%")
        st.metric("Average rating", f"{insight.sentiment.average_rating:.1f} / 5")

    if insight.categorized_pulse:
        st.subheader("Pulse pillars")
        for pillar in pulse_pillars(insight.categorized_pulse):
            st.write(f"**{pillar['label']}** - {pillar['description']}")
            st.progress(min(max(int(pillar['width']), 0), 100))

    if insight.price_comparison:
        st.subheader("Where to buy")
        for price, best in label_price_points(insight.price_comparison):
            stock = "In stock" if price.availability else "Out of stock"
            label = " 🏷️ Best value" if best else ""
            st.markdown(f"[{price.store}]({price.link}) **{price.price}** · {stock}{label}")

    st.subheader("Reviews")
    tabs = st.tabs(["Most relevant", "Highest rated", "Critical"])
    for tab, key in zip(tabs, DisplayConstants.REVIEW_TABS):
        with tab:
            reviews = app.reviews(key)
            if not reviews:
                st.caption("No reviews yet.")
            for review in reviews[:PromptConstants.MAX_REVIEWS_PER_TAB]:
                _render_review(review)

    with st.expander("✍️ Write a review"):
        with st.form("review_form", clear_on_submit=True):
            text = st.text_area("Your review")
            rating = st.slider("Rating", 1, 5, 5)
            target = st.selectbox("Post to", ["trustpulse", "google", "website"])
            user = app.state.current_user
            collaboration = False
            if user is not None and (user.is_blogger or user.is_influencer):
                collaboration = st.checkbox("Sponsored collaboration")
            if st.form_submit_button("Post review"):
                try:
                    if app.post_review(text, rating, target, collaboration=collaboration) is not None:
                        st.success("Review posted.")
                except FormValidationError as e:
                    st.warning(str(e))

    st.subheader("Similar products")
    buckets = app.similar_buckets()
    cols = st.columns(len(buckets))
    for col, (bucket, items) in zip(cols, buckets.items()):
        with col:
            st.markdown(f"**{bucket}**")
            if not items:
                st.caption("Nothing here yet.")
            for item in items:
                st.write(f"{item.name} {item.price_estimate or ''}")

    if insight.is_consumable and insight.nutritional_facts:
        with st.expander("🥗 Nutrition"):
            facts = insight.nutritional_facts
            st.write(f"Calories: {facts.calories or 'n/a'}")
            for macro in facts.macros:
                st.write(f"{macro.label}: {macro.value}")
            for recipe in insight.recipes:
                st.markdown(f"**{recipe.title}**")
                st.write(", ".join(recipe.ingredients))

    if insight.specifications:
        with st.expander("📐 Specifications"):
            for spec in insight.specifications:
                st.write(f"**{spec.label}**: {spec.value}")


def _render_brand(insight):
    st.header(insight.brand_name)
    st.caption(insight.industry)
    st.metric("Market Trust Score", f"{insight.market_trust_score:.0f}%")
    st.write(insight.description)
    if insight.mission:
        st.info(insight.mission)
    if insight.product_catalog:
        st.subheader("Catalog")
        for item in insight.product_catalog:
            st.write(f"**{item.name}** ({item.category}) {item.price_range} · pulse {item.trust_pulse:.0f}")
    if insight.influencer_pulse:
        st.subheader("Influencer pulse")
        for quote in insight.influencer_pulse:
            st.write(f"{quote.name} {quote.handle}: \"{quote.quote}\"")
    for mention in insight.web_mentions:
        _render_review(mention)


def _render_try_on():
    st.subheader("📷 Try it on")
    photo = st.camera_input("Capture a photo")
    if photo is None:
        return
    image_b64 = encode_capture(photo.getvalue())
    mode = st.radio("Mode", TRY_ON_MODES, horizontal=True)
    prompt = st.text_input("What should we place?", value=st.session_state.get("query", ""))
    c1, c2 = st.columns(2)
    if c1.button("Render"):
        with st.spinner("Rendering..."):
            url = virtual_try_on(image_b64, prompt, mode, app.llm)
        if url:
            st.image(url)
        else:
            st.warning("Couldn't render that photo. Please retake it.")
    if c2.button("Measure"):
        with st.spinner("Scanning..."):
            st.write(estimate_measurement(image_b64, prompt, app.llm))


def marketplace_view():
    state = app.state
    if state.is_loading:
        st.info("Searching...")
    elif state.product_insight is not None:
        _render_product(state.product_insight)
        _render_try_on()
    elif state.brand_insight is not None:
        _render_brand(state.brand_insight)
    else:
        if state.last_outcome is not None and not state.last_outcome.ok:
            st.warning(f"No insight for '{state.query}'. Try a more specific product or brand name.")
        st.title("💠 TrustPulse")
        st.write("Search any product or brand to see its verified pulse.")


def business_view():
    st.header("🏢 Business directory")
    term = st.text_input("Search businesses")
    category = st.selectbox("Category", DisplayConstants.DIRECTORY_CATEGORIES)
    for biz in app.directory(term, category):
        with st.container(border=True):
            st.markdown(f"**{biz.business_name}** {'✅' if biz.is_verified else ''}")
            st.caption(f"{biz.category} · {biz.location} · {biz.rating:.1f}")
            st.write(biz.description)

    with st.expander("➕ List your business"):
        with st.form("business_form"):
            name = st.text_input("Business name")
            slogan = st.text_input("Slogan")
            new_category = st.selectbox("Category", DisplayConstants.DIRECTORY_CATEGORIES[1:])
            address = st.text_input("Address")
            website = st.text_input("Website")
            phone = st.text_input("Phone")
            color = st.color_picker("Brand color", "#2563eb")
            with_card = st.checkbox("Generate a business card image")
            if st.form_submit_button("Publish"):
                try:
                    image = None
                    if with_card:
                        with st.spinner("Designing card..."):
                            image = generate_business_asset(card_prompt(name, slogan, new_category, color),
                                                            "card", app.llm)
                    app.publish_business(name=name, slogan=slogan, category=new_category, address=address,
                                         website=website, phone=phone, image=image, color=color)
                    st.success(f"{name} is live.")
                except FormValidationError as e:
                    st.warning(str(e))


def influencers_view():
    st.header("⭐ Influencers")
    query = st.text_input("Category", value="tech")
    if st.button("Find influencers"):
        with st.spinner("Searching..."):
            profiles = search_influencers(query, app.llm)
        if not profiles:
            st.warning("No influencers found.")
        for p in profiles:
            st.markdown(f"**{p.name}** {p.handle} · {p.category} · trust {p.trust_score:.0f} · {p.followers:,} followers")


def collab_view():
    st.header("🤝 Collab hub")
    query = st.text_input("Brand, niche or creator")
    target = st.radio("Match with", COLLAB_TARGETS, horizontal=True)
    if st.button("Find matches") and query:
        with st.spinner("Matching..."):
            matches = find_collab_matches(query, target, app.llm)
        if not matches:
            st.warning("No matches found.")
        for m in matches:
            st.markdown(f"**{m.name}** ({m.category}) · reach {m.reach} · match {m.matched_pulse:.0f}%")
            st.caption(m.description)


def creator_hub_view():
    st.header("🎙️ Creator hub")
    user = app.state.current_user
    if user is None:
        st.info("Creator tools are restricted. Sign in from the sidebar to verify your profile.")
        return
    if user.is_influencer:
        st.success(f"{user.name} is a verified Pulse creator · influence {user.influence_score:.0f}")
        st.caption("Collaboration reviews you post are now tagged as sponsored.")
        return

    st.write("Link your primary content platform so we can verify your creator profile.")
    platform = st.radio("Platform", CREATOR_PLATFORMS, horizontal=True)
    handle = st.text_input("Social handle", placeholder="@yourhandle")
    if st.button("Verify Pulse blogger", disabled=not handle.strip()):
        try:
            app.verify_creator(handle, platform)
            st.rerun()
        except FormValidationError as e:
            st.warning(str(e))


VIEWS = {
    ViewConstants.MARKETPLACE: marketplace_view,
    ViewConstants.BUSINESS: business_view,
    ViewConstants.INFLUENCERS: influencers_view,
    ViewConstants.CREATOR_HUB: creator_hub_view,
    ViewConstants.COLLAB_HUB: collab_view,
}

with st.sidebar:
    st.header("🔎 Search")
    query = st.text_input("Product or brand", key="query")
    if st.button("Get pulse", width='stretch') and query.strip():
        with st.spinner("Reading the pulse..."):
            app.search(query.strip())

    view = st.radio("View", list(VIEWS), index=list(VIEWS).index(app.state.view)
                    if app.state.view in VIEWS else 0)
    if view != app.state.view:
        app.set_view(view)

    st.subheader("👤 Account")
    user = app.state.current_user
    if user is None:
        name = st.text_input("Name")
        if st.button("Continue as guest") and name.strip():
            app.login(make_user(name))
            st.rerun()
    else:
        st.write(f"Signed in as **{user.name}**")
        if st.button("Sign out"):
            app.logout()
            st.rerun()

    with st.expander("💬 Pulse AI"):
        chat = st.session_state.chat
        for role, text in chat.transcript[-6:]:
            st.markdown(f"**{'You' if role == 'user' else 'Pulse AI'}:** {text}")
        message = st.text_input("Ask Pulse AI", key="chat_message")
        if st.button("Send") and message.strip():
            chat.send(message)
            st.rerun()

if app.state.show_auth_prompt:
    st.warning("Please sign in from the sidebar to post a review.")
    if st.button("Dismiss"):
        app.dismiss_auth()
        st.rerun()

VIEWS.get(app.state.view, marketplace_view)()
